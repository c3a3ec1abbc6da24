# topics/admin.py
from django.contrib import admin
from .models import Bookmark, Notification, Post, SiteSetting, Tag, TagGroup, Topic, TopicTag


class TopicTagInline(admin.TabularInline):
    model = TopicTag
    extra = 0


@admin.register(Topic)
class TopicAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'posts_count', 'visible', 'bumped_at', 'created_at')
    list_filter = ('visible', 'closed', 'archived')
    search_fields = ('title',)
    inlines = [TopicTagInline]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ('id', 'topic', 'post_number', 'user', 'created_at')
    readonly_fields = ('post_number',) # 순번은 저장 시 자동 부여


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'created_at')
    search_fields = ('name',)


@admin.register(TagGroup)
class TagGroupAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'permissions')
    filter_horizontal = ('tags',)


@admin.register(Bookmark)
class BookmarkAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'topic', 'post', 'name', 'reminder_at')


@admin.register(SiteSetting)
class SiteSettingAdmin(admin.ModelAdmin):
    list_display = ('name', 'value', 'updated_at')


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'notification_type', 'read', 'created_at')
