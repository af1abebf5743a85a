"""
URL configuration for the hostelmess project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path, include

from rest_framework.authtoken.views import obtain_auth_token

from django.conf import settings
from django.conf.urls.static import static
from mess.views import MessTokenObtainPairView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('mess/', include('mess.urls', namespace='mess')),
    path('api-auth/', include('rest_framework.urls', namespace='rest_framework')),
    path('auth/', include('djoser.urls')),
    path('auth/', include('djoser.urls.authtoken')),
    path("auth/jwt/create/", MessTokenObtainPairView.as_view(), name="jwt-create"),
    path('auth/', include('djoser.urls.jwt')),     # refresh / verify
    path('api-token-auth/', obtain_auth_token),
]


if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
