from functools import cached_property

from .models import TagGroup


class Guardian:
    """
    요청한 사용자가 무엇을 볼 수 있는지 판단하는 권한 객체.
    user가 None(또는 AnonymousUser)이면 비로그인 사용자로 취급합니다.
    """

    def __init__(self, user=None):
        if user is not None and not user.is_authenticated:
            user = None
        self.user = user

    @property
    def user_id(self):
        return self.user.id if self.user else None

    def is_anonymous(self):
        return self.user is None

    def is_staff(self):
        return bool(self.user and (self.user.is_staff or self.user.is_superuser))

    def is_admin(self):
        return bool(self.user and self.user.is_superuser)

    @cached_property
    def _group_names(self):
        names = {TagGroup.EVERYONE}
        if self.user is None:
            return frozenset(names)
        if self.is_staff():
            names.add(TagGroup.STAFF)
        if self.is_admin():
            names.add(TagGroup.ADMINS)
        # 예약 역할(everyone/staff/admins)은 권한 플래그로만 부여. 같은 이름의 auth 그룹은 무시
        names.update(
            name for name in self.user.groups.values_list('name', flat=True)
            if name not in TagGroup.RESERVED_ROLES
        )
        return frozenset(names)

    def group_names(self):
        return set(self._group_names)

    def can_see_tag_group(self, tag_group):
        if self.is_staff():
            return True
        return bool(tag_group.visible_roles() & self._group_names)

    def hidden_tag_names(self):
        """이 사용자에게 보이면 안 되는 태그 이름들 (스태프는 빈 집합)"""
        if self.is_staff():
            return set()

        hidden = set()
        for tag_group in TagGroup.objects.restricted().prefetch_related('tags'):
            if not self.can_see_tag_group(tag_group):
                hidden.update(tag.name for tag in tag_group.tags.all())
        return hidden

    def can_see_topic(self, topic):
        return self.is_staff() or topic.visible

    def __repr__(self):
        return f"Guardian(user_id={self.user_id})"
