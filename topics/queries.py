from django.conf import settings
from django.db.models import Max, Prefetch

from .guardian import Guardian
from .models import Bookmark, Topic, TopicTag


class TopicQuery:
    """
    토픽 목록 조회.
    TopicListItemSerializer가 추가 쿼리 없이 그릴 수 있도록
    태그(붙은 순서)와 현재 사용자의 북마크(user_bookmarks)를 미리 불러옵니다.
    """

    def __init__(self, guardian=None):
        self.guardian = guardian or Guardian()

    def _base_queryset(self):
        qs = Topic.objects.all()
        if not self.guardian.is_staff():
            qs = qs.filter(visible=True)

        tag_prefetch = Prefetch(
            'topic_tags',
            queryset=TopicTag.objects.select_related('tag').order_by('id'),
        )
        user_id = self.guardian.user_id
        bookmark_prefetch = Prefetch(
            'bookmarks',
            # 비로그인 사용자는 id가 없으므로 빈 목록이 붙음
            queryset=Bookmark.objects.filter(user_id=user_id).select_related('post').order_by('-updated_at', '-id'),
            to_attr='user_bookmarks',
        )
        return qs.prefetch_related(tag_prefetch, bookmark_prefetch)

    def _limit(self, limit):
        if limit is None:
            return settings.TOPIC_LIST_DEFAULT_LIMIT
        return max(1, min(int(limit), settings.TOPIC_LIST_MAX_LIMIT))

    def latest(self, limit=None):
        return self._base_queryset().order_by('-bumped_at', '-id')[:self._limit(limit)]

    def list_bookmarks(self, limit=None):
        """사용자가 북마크한 토픽 (가장 최근에 북마크를 건드린 토픽 먼저)"""
        if self.guardian.is_anonymous():
            return Topic.objects.none()

        qs = (
            self._base_queryset()
            .filter(bookmarks__user_id=self.guardian.user_id)
            .annotate(last_bookmarked_at=Max('bookmarks__updated_at'))
            .order_by('-last_bookmarked_at', '-id')
        )
        return qs[:self._limit(limit)]
