import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import AccessToken

from clinic.exceptions import ConflictError, InvalidCredentials

logger = logging.getLogger(__name__)

User = get_user_model()


def issue_token(user) -> str:
    """Signed access token carrying the user id and email."""
    token = AccessToken.for_user(user)
    token['email'] = user.email
    return str(token)


def _ensure_email_free(email: str, exclude_pk=None) -> None:
    qs = User.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ConflictError('Email already in use')


def register_user(*, full_name: str, email: str, password: str):
    _ensure_email_free(email)
    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, full_name=full_name)
    except IntegrityError:
        # lost the race against a concurrent signup with the same email
        raise ConflictError('Email already in use')
    logger.info('signup ok user=%s', user.pk)
    return user


def login_user(request, *, email: str, password: str):
    user = authenticate(request, username=email, password=password)
    if user is None:
        logger.warning('login failed ip=%s', request.META.get('REMOTE_ADDR'))
        raise InvalidCredentials()
    logger.info('login ok user=%s', user.pk)
    return user


def update_profile(user, *, full_name: str | None = None, email: str | None = None):
    """Apply the supplied, non-blank fields; the password is not re-checked."""
    changed = []
    if full_name:
        user.full_name = full_name
        changed.append('full_name')
    if email and email != user.email:
        _ensure_email_free(email, exclude_pk=user.pk)
        user.email = email
        changed.append('email')
    if changed:
        try:
            with transaction.atomic():
                user.save(update_fields=changed)
        except IntegrityError:
            raise ConflictError('Email already in use')
    return user
