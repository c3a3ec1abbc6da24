import logging
from types import MappingProxyType

from django.conf import settings

logger = logging.getLogger(__name__)

TRUTHY = {'true', '1', 'yes', 'on', 't'}


class UnknownSiteSetting(KeyError):
    """정의되지 않은 사이트 설정 이름 (오타를 조용히 False로 넘기지 않기 위함)"""


def _to_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


class SiteSettings:
    """
    기능 플래그 조회용 불변 스냅샷.
    시리얼라이저에는 전역 설정 대신 이 객체를 context로 넘깁니다.
    """

    def __init__(self, overrides=None):
        values = dict(settings.SITE_SETTING_DEFAULTS)
        for name, value in (overrides or {}).items():
            if name not in values:
                raise UnknownSiteSetting(name)
            values[name] = _to_bool(value)
        self._values = MappingProxyType(values)

    @classmethod
    def load(cls):
        """기본값 위에 DB(SiteSetting)에 저장된 값을 덮어씁니다."""
        from .models import SiteSetting

        overrides = {}
        for name, value in SiteSetting.objects.values_list('name', 'value'):
            if name not in settings.SITE_SETTING_DEFAULTS:
                logger.warning(f"[SiteSettings] ignoring unknown setting in DB: {name}")
                continue
            overrides[name] = value
        return cls(overrides)

    def is_enabled(self, name) -> bool:
        try:
            return self._values[name]
        except KeyError:
            raise UnknownSiteSetting(name) from None

    def as_dict(self):
        return dict(self._values)

    def __repr__(self):
        return f"SiteSettings({dict(self._values)!r})"
