"""
Authentication endpoints.

Signup and login are open endpoints behind a shared per-address
throttle; both answer ``{user, token}`` where ``token`` is a signed
bearer token valid for seven days.  ``/api/auth/user`` returns or
updates the account behind the presented token.  There is no server
side logout: a client signs out by discarding its token.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.serializers.auth import LoginSerializer, SignupSerializer, UserSerializer, UserUpdateSerializer
from clinic.services.auth import issue_token, login_user, register_user, update_profile
from clinic.throttling import ApiRateThrottle, AuthRateThrottle


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([AuthRateThrottle, ApiRateThrottle])
def signup_view(request):
    s = SignupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = register_user(full_name=vd['fullName'], email=vd['email'], password=vd['password'])
    return Response(
        {'user': UserSerializer(user).data, 'token': issue_token(user)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([AuthRateThrottle, ApiRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = login_user(request, email=vd['email'], password=vd['password'])
    return Response({'user': UserSerializer(user).data, 'token': issue_token(user)})


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def current_user_view(request):
    if request.method == 'GET':
        return Response({'user': UserSerializer(request.user).data})
    s = UserUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = update_profile(request.user, full_name=vd.get('fullName'), email=vd.get('email'))
    return Response({'user': UserSerializer(user).data})
