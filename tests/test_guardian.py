import pytest
from django.contrib.auth.models import AnonymousUser, Group

from topics.guardian import Guardian
from topics.models import Tag, TagGroup


def test_anonymous_guardian():
    guardian = Guardian(AnonymousUser())
    assert guardian.is_anonymous()
    assert guardian.user_id is None
    assert not guardian.is_staff()
    assert guardian.group_names() == {"everyone"}


@pytest.mark.django_db
def test_staff_flags(user, admin):
    assert not Guardian(user).is_staff()
    assert Guardian(admin).is_staff()
    assert Guardian(admin).is_admin()
    assert {"everyone", "staff", "admins"} <= Guardian(admin).group_names()


@pytest.mark.django_db
def test_hidden_tag_names_for_non_staff(user, admin, staff_tag_group):
    assert Guardian(user).hidden_tag_names() == {"hidden"}
    assert Guardian().hidden_tag_names() == {"hidden"}
    assert Guardian(admin).hidden_tag_names() == set()


@pytest.mark.django_db
def test_public_tag_group_hides_nothing(user):
    group = TagGroup.objects.create(name="public")
    group.tags.add(Tag.objects.create(name="python"))

    assert group.is_restricted is False
    assert Guardian(user).hidden_tag_names() == set()


@pytest.mark.django_db
def test_member_of_permitted_group_sees_restricted_tags(user):
    group = TagGroup.objects.create(name="mods", permissions={"moderators": TagGroup.PERMISSION_READONLY})
    group.tags.add(Tag.objects.create(name="mod-only"))
    assert Guardian(user).hidden_tag_names() == {"mod-only"}

    user.groups.add(Group.objects.create(name="moderators"))
    assert Guardian(user).hidden_tag_names() == set()


@pytest.mark.django_db
def test_can_see_topic(make_topic, user, admin):
    unlisted = make_topic(visible=False)
    assert not Guardian(user).can_see_topic(unlisted)
    assert Guardian(admin).can_see_topic(unlisted)


@pytest.mark.django_db
def test_auth_group_named_like_a_reserved_role_grants_nothing(user, staff_tag_group):
    for name in ("staff", "admins"):
        user.groups.add(Group.objects.create(name=name))
    guardian = Guardian(user)

    assert not guardian.is_staff()
    assert guardian.group_names() == {"everyone"}
    assert guardian.hidden_tag_names() == {"hidden"}


@pytest.mark.django_db
def test_tag_in_public_and_restricted_group_stays_hidden(user, admin):
    python = Tag.objects.create(name="python")
    TagGroup.objects.create(name="languages").tags.add(python)
    TagGroup.objects.create(name="staff picks", permissions={"staff": TagGroup.PERMISSION_FULL}).tags.add(python)

    assert Guardian(user).hidden_tag_names() == {"python"}
    assert Guardian(admin).hidden_tag_names() == set()


@pytest.mark.django_db
def test_restricted_queryset_skips_public_groups(staff_tag_group):
    TagGroup.objects.create(name="public")

    assert list(TagGroup.objects.restricted()) == [staff_tag_group]
