import logging
from typing import Optional
from urllib.parse import urlparse

import tldextract

logger = logging.getLogger(__name__)

# 네트워크로 최신 Public Suffix List를 받지 않고 패키지에 포함된 스냅샷만 사용
_extract = tldextract.TLDExtract(suffix_list_urls=())


def root_domain(url: Optional[str]) -> Optional[str]:
    """
    URL의 호스트에서 등록 가능한 루트 도메인을 뽑습니다.
    - http://meta.discourse.org      -> discourse.org
    - https://news.bbc.co.uk/a/b     -> bbc.co.uk
    - http://localhost:3000          -> localhost (공개 접미사가 없으면 호스트 그대로)
    파싱할 수 없는 URL이면 None.
    """
    if not url:
        return None

    try:
        host = urlparse(url.strip()).hostname
    except ValueError as e:
        # 예: 닫히지 않은 IPv6 대괄호
        logger.warning(f"[root_domain] unparsable url={url!r}: {e}")
        return None

    if not host:
        return None

    parts = _extract(host)
    if parts.domain and parts.suffix:
        return f"{parts.domain}.{parts.suffix}"
    return host
