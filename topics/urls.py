from django.urls import path
from . import views

urlpatterns = [
    # 최신 토픽 목록: localhost:8000/api/topics/latest/
    path('api/topics/latest/', views.LatestTopicListView.as_view(), name='api_topic_latest'),

    # 내가 북마크한 토픽: localhost:8000/api/topics/bookmarks/
    path('api/topics/bookmarks/', views.BookmarkedTopicListView.as_view(), name='api_topic_bookmarks'),
]
