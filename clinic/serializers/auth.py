import re

from rest_framework import serializers

from clinic.models import User


class SignupSerializer(serializers.Serializer):
    fullName = serializers.CharField(min_length=2, max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, max_length=128, write_only=True, trim_whitespace=False)

    def validate_email(self, v):
        return v.strip().lower()

    def validate_password(self, v):
        if not re.search(r'[A-Z]', v):
            raise serializers.ValidationError('Password must contain at least one uppercase letter')
        if not re.search(r'\d', v):
            raise serializers.ValidationError('Password must contain at least one number')
        return v


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, v):
        return v.strip().lower()


class UserUpdateSerializer(serializers.Serializer):
    # Blank values mean "leave unchanged".
    fullName = serializers.CharField(required=False, allow_blank=True, min_length=2, max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True)

    def validate_email(self, v):
        return v.strip().lower()


class UserSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name')
    createdAt = serializers.DateTimeField(source='date_joined')

    class Meta:
        model = User
        fields = ['id', 'email', 'fullName', 'createdAt']
        read_only_fields = fields
