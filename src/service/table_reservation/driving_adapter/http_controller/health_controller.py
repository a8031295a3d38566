from fastapi import APIRouter

from src.platform.clock import local_now
from src.platform.config.core_setting import settings


router = APIRouter()


@router.get('')
async def health() -> dict[str, str]:
    """Liveness check"""
    return {
        'status': 'UP',
        'timestamp': local_now().isoformat(),
        'application': settings.PROJECT_NAME,
        'version': settings.VERSION,
    }


@router.get('/ready')
async def ready() -> dict[str, str]:
    """Readiness check"""
    return {'status': 'READY', 'timestamp': local_now().isoformat()}
