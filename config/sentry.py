import sentry_sdk

from config.settings import get_settings


def init_sentry():
    """Initialize Sentry for error tracking and monitoring."""
    settings = get_settings()
    if settings.sentry_dsn is not None:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            _experiments={
                "enable_logs": True,
            },
            traces_sample_rate=0.1,
            environment=settings.environment,
        )
