from django.conf import settings

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated

from .guardian import Guardian
from .queries import TopicQuery
from .serializers import TopicListItemSerializer
from .site_settings import SiteSettings


def parse_limit(request):
    """?limit= 파싱. 잘못된 값이면 (None, 에러 Response)"""
    raw = (request.query_params.get("limit") or "").strip()
    if not raw:
        return settings.TOPIC_LIST_DEFAULT_LIMIT, None
    try:
        limit = int(raw)
    except ValueError:
        return None, Response({"detail": "limit must be an integer"}, status=status.HTTP_400_BAD_REQUEST)
    if not 1 <= limit <= settings.TOPIC_LIST_MAX_LIMIT:
        return None, Response(
            {"detail": f"limit must be between 1 and {settings.TOPIC_LIST_MAX_LIMIT}"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return limit, None


def serializer_context(request, guardian):
    """시리얼라이저에 넘길 권한/설정/숨김 태그 묶음"""
    hidden = (request.query_params.get("hidden_tags") or "").strip()
    return {
        "request": request,
        "guardian": guardian,
        "site_settings": SiteSettings.load(),
        "hidden_tag_names": [name.strip() for name in hidden.split(",") if name.strip()],
    }


class LatestTopicListView(APIView):
    """
    최신 토픽 목록 (비로그인도 조회 가능)
    쿼리 파라미터:
      - limit=1..100 (기본 30)
      - hidden_tags=a,b  목록에서 빼고 싶은 태그
    """
    permission_classes = [AllowAny]

    def get(self, request):
        limit, error = parse_limit(request)
        if error:
            return error

        guardian = Guardian(request.user)
        topics = TopicQuery(guardian).latest(limit)
        serializer = TopicListItemSerializer(topics, many=True, context=serializer_context(request, guardian))
        return Response(serializer.data)


class BookmarkedTopicListView(APIView):
    """
    로그인한 사용자가 북마크한 토픽 목록
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        limit, error = parse_limit(request)
        if error:
            return error

        guardian = Guardian(request.user)
        topics = TopicQuery(guardian).list_bookmarks(limit)
        serializer = TopicListItemSerializer(topics, many=True, context=serializer_context(request, guardian))
        return Response(serializer.data, status=status.HTTP_200_OK)
