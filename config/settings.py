"""
포럼 토픽 목록 API 설정
"""

import os
from datetime import timedelta


# ==========================================
# 1. 보안 / 배포 환경 변수
# ==========================================

SECRET_KEY = os.environ.get('SECRET_KEY', 'django-insecure-default-dev-key')

# 운영에서는 DEBUG=False
DEBUG = os.environ.get('DEBUG', 'True') == 'True'

ALLOWED_HOSTS = os.environ.get('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')


# ==========================================
# 2. 앱 / 미들웨어
# ==========================================

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'corsheaders',
    'rest_framework',
    'rest_framework_simplejwt',

    'topics',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware', # CommonMiddleware보다 앞
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
]

ROOT_URLCONF = 'config.urls'

# 템플릿은 Django admin 화면에만 쓰임 (admin이 요구하는 context processor만 등록)
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# ==========================================
# 3. DB (Postgres)
# ==========================================

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.environ.get('POSTGRES_DB', 'forum'),
        'USER': os.environ.get('POSTGRES_USER', 'postgres'),
        'PASSWORD': os.environ.get('POSTGRES_PASSWORD', 'postgres'),
        'HOST': os.environ.get('POSTGRES_HOST', 'db'),
        'PORT': int(os.environ.get('POSTGRES_PORT', '5432')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ==========================================
# 4. 언어 / 시간대
# ==========================================

LANGUAGE_CODE = 'ko-kr'
TIME_ZONE = 'Asia/Seoul' # 리마인더 시각(오전 8시 등) 계산 기준
USE_I18N = True
USE_TZ = True

# admin CSS/JS 용
STATIC_URL = 'static/'


# ==========================================
# 5. DRF & JWT 인증
# ==========================================

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        # Bearer 토큰 먼저, 없으면 admin 로그인 세션
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
}

# access 1시간 / refresh 7일
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(hours=1),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),
    'ROTATE_REFRESH_TOKENS': False,
    'BLACKLIST_AFTER_ROTATION': False,
    'AUTH_HEADER_TYPES': ('Bearer',),
}


# ==========================================
# 6. CORS / CSRF
# ==========================================

CORS_ALLOW_ALL_ORIGINS = os.environ.get('CORS_ALLOW_ALL_ORIGINS', 'False') == 'True'
CORS_ALLOWED_ORIGINS = [
    origin for origin in os.environ.get('CORS_ALLOWED_ORIGINS', 'http://localhost:3000').split(',') if origin
]

CSRF_TRUSTED_ORIGINS = [
    'http://localhost:8000',
    'http://127.0.0.1:8000',
]


# ==========================================
# 7. Celery (Redis 브로커)
# ==========================================

CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://redis:6379/0')
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE


# ==========================================
# 8. 포럼 사이트 설정 기본값
# ==========================================

# 관리자가 SiteSetting 테이블에 값을 저장하면 그 값이 우선합니다.
SITE_SETTING_DEFAULTS = {
    'topic_featured_link_enabled': True,
    'tagging_enabled': False,
    'enable_bookmarks_with_reminders': False,
}

# 토픽 목록 한 페이지 기본/최대 개수
TOPIC_LIST_DEFAULT_LIMIT = 30
TOPIC_LIST_MAX_LIMIT = 100

# 리마인더 태스크가 한 번에 처리하는 북마크 수
BOOKMARK_REMINDER_BATCH_SIZE = int(os.environ.get('BOOKMARK_REMINDER_BATCH_SIZE', '200'))
