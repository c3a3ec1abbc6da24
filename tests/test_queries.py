from datetime import timedelta

import pytest
from django.utils import timezone

from topics.guardian import Guardian
from topics.models import Bookmark
from topics.queries import TopicQuery


@pytest.mark.django_db
def test_latest_orders_by_bump_and_hides_unlisted_topics(make_topic, user, admin):
    now = timezone.now()
    old = make_topic(title="old", bumped_at=now - timedelta(days=1))
    new = make_topic(title="new", bumped_at=now)
    unlisted = make_topic(title="unlisted", visible=False)

    assert list(TopicQuery(Guardian(user)).latest()) == [new, old]
    assert unlisted in list(TopicQuery(Guardian(admin)).latest())


@pytest.mark.django_db
def test_latest_respects_limit(make_topic):
    for i in range(3):
        make_topic(title=f"topic {i}")

    assert len(TopicQuery().latest(limit=2)) == 2


@pytest.mark.django_db
def test_latest_prefetches_only_current_user_bookmarks(topic, user, admin, make_post):
    post = make_post(topic, user)
    Bookmark.objects.create(user=admin, post=post)

    listed = TopicQuery(Guardian(user)).latest()[0]
    assert listed.user_bookmarks == []

    listed = TopicQuery(Guardian(admin)).latest()[0]
    assert [b.post_id for b in listed.user_bookmarks] == [post.id]


@pytest.mark.django_db
def test_list_bookmarks(make_topic, user, make_post):
    first = make_topic(title="first")
    second = make_topic(title="second")
    make_topic(title="not bookmarked")
    Bookmark.objects.create(user=user, post=make_post(first, user))
    Bookmark.objects.create(user=user, post=make_post(second, user))

    topics = list(TopicQuery(Guardian(user)).list_bookmarks())
    assert topics == [second, first]


def test_list_bookmarks_is_empty_for_anonymous(db):
    assert list(TopicQuery().list_bookmarks()) == []
