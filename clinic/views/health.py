import logging

from django.db import connections
from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def healthz(request):
    now = timezone.now().isoformat()
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            c.fetchone()
    except Exception:
        logger.exception('health check: database unreachable')
        return Response({'ok': False, 'timestamp': now}, status=503)
    return Response({'ok': True, 'timestamp': now})
