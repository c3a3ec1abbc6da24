from functools import cached_property

from rest_framework import serializers

from .domains import root_domain
from .guardian import Guardian
from .models import Topic
from .site_settings import SiteSettings

FEATURED_LINK_FIELDS = ('featured_link', 'featured_link_root_domain')
BOOKMARK_DETAIL_FIELDS = ('bookmark_id', 'bookmark_name', 'bookmark_reminder_at')


class TopicListItemSerializer(serializers.ModelSerializer):
    """
    토픽 목록의 한 줄(JSON)을 만드는 읽기 전용 시리얼라이저.

    context로 받는 값:
      - guardian: 권한 객체 (없으면 request.user로 생성, 그것도 없으면 비로그인)
      - site_settings: 기능 플래그 (없으면 DB에서 로드)
      - hidden_tag_names: 호출자가 명시적으로 숨길 태그 이름들 (스태프에게도 적용)

    토픽 인스턴스에 user_bookmarks 속성이 prefetch 되어 있으면(TopicQuery)
    북마크 정보는 그 목록을 그대로 사용합니다.
    """

    reply_count = serializers.SerializerMethodField()
    pinned = serializers.SerializerMethodField()
    bumped = serializers.SerializerMethodField()
    tags = serializers.SerializerMethodField()
    featured_link = serializers.SerializerMethodField()
    featured_link_root_domain = serializers.SerializerMethodField()
    bookmarked = serializers.SerializerMethodField()
    bookmark_id = serializers.SerializerMethodField()
    bookmark_name = serializers.SerializerMethodField()
    bookmark_reminder_at = serializers.SerializerMethodField()
    bookmarked_post_numbers = serializers.SerializerMethodField()

    class Meta:
        model = Topic
        fields = [
            'id', 'title', 'slug', 'posts_count', 'reply_count', 'highest_post_number',
            'views', 'like_count', 'visible', 'closed', 'archived', 'pinned',
            'created_at', 'bumped_at', 'last_posted_at', 'bumped',
            'tags', 'featured_link', 'featured_link_root_domain',
            'bookmarked', 'bookmark_id', 'bookmark_name', 'bookmark_reminder_at',
            'bookmarked_post_numbers',
        ]
        read_only_fields = fields

    # ---------------------------------------------
    # 요청 단위 협력 객체 (many=True여도 한 번만 계산)
    # ---------------------------------------------
    @cached_property
    def guardian(self):
        guardian = self.context.get('guardian')
        if guardian is not None:
            return guardian
        request = self.context.get('request')
        return Guardian(getattr(request, 'user', None))

    @cached_property
    def site_settings(self):
        return self.context.get('site_settings') or SiteSettings.load()

    @cached_property
    def excluded_tag_names(self):
        return set(self.context.get('hidden_tag_names') or ())

    @cached_property
    def _bookmark_cache(self):
        return {}

    @cached_property
    def guardian_hidden_tag_names(self):
        return self.guardian.hidden_tag_names()

    def to_representation(self, instance):
        data = super().to_representation(instance)

        if not self.site_settings.is_enabled('topic_featured_link_enabled'):
            for field in FEATURED_LINK_FIELDS:
                data.pop(field, None)

        if not (self.site_settings.is_enabled('enable_bookmarks_with_reminders')
                and self._user_bookmarks(instance)):
            for field in BOOKMARK_DETAIL_FIELDS:
                data.pop(field, None)

        return data

    # ---------------------------------------------
    # 단순 파생 값
    # ---------------------------------------------
    def get_reply_count(self, obj):
        return max(obj.posts_count - 1, 0)

    def get_pinned(self, obj):
        return obj.pinned_at is not None

    def get_bumped(self, obj):
        return bool(obj.bumped_at and obj.created_at and obj.bumped_at > obj.created_at)

    # ---------------------------------------------
    # 외부 링크
    # ---------------------------------------------
    def get_featured_link(self, obj):
        return obj.featured_link or None

    def get_featured_link_root_domain(self, obj):
        # 꺼져 있으면 to_representation에서 어차피 빠지므로 도메인 파싱 생략
        if not self.site_settings.is_enabled('topic_featured_link_enabled'):
            return None
        return root_domain(obj.featured_link)

    # ---------------------------------------------
    # 태그 (권한 필터 -> 명시적 제외 목록 순서)
    # ---------------------------------------------
    def get_tags(self, obj):
        if not self.site_settings.is_enabled('tagging_enabled'):
            return []

        names = [topic_tag.tag.name for topic_tag in obj.topic_tags.all()]
        names = [name for name in names if name not in self.guardian_hidden_tag_names]
        return [name for name in names if name not in self.excluded_tag_names]

    # ---------------------------------------------
    # 북마크
    # ---------------------------------------------
    def _user_bookmarks(self, obj):
        """최근 수정 순으로 정렬된 현재 사용자의 북마크 목록"""
        prefetched = getattr(obj, 'user_bookmarks', None)
        if prefetched is not None:
            return prefetched

        cache = self._bookmark_cache
        if obj.pk not in cache:
            user_id = self.guardian.user_id
            if user_id is None:
                cache[obj.pk] = []
            else:
                cache[obj.pk] = list(
                    obj.bookmarks.filter(user_id=user_id)
                    .select_related('post')
                    .order_by('-updated_at', '-id')
                )
        return cache[obj.pk]

    def _latest_bookmark(self, obj):
        bookmarks = self._user_bookmarks(obj)
        return bookmarks[0] if bookmarks else None

    def get_bookmarked(self, obj):
        return bool(self._user_bookmarks(obj))

    def get_bookmark_id(self, obj):
        bookmark = self._latest_bookmark(obj)
        return bookmark.id if bookmark else None

    def get_bookmark_name(self, obj):
        bookmark = self._latest_bookmark(obj)
        return bookmark.name if bookmark else None

    def get_bookmark_reminder_at(self, obj):
        bookmark = self._latest_bookmark(obj)
        if bookmark is None or bookmark.reminder_at is None:
            return None
        return serializers.DateTimeField().to_representation(bookmark.reminder_at)

    def get_bookmarked_post_numbers(self, obj):
        return sorted({bookmark.post.post_number for bookmark in self._user_bookmarks(obj)})
