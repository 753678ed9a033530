"""
URL configuration for pilot_logbook project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import routers

from backup import views as backup_views

router = routers.DefaultRouter()
router.register(r'backup-imports', backup_views.BackupImportViewSet)


urlpatterns = [
    path('api/backup/import/', backup_views.BackupImportView.as_view(), name='backup-import'),
    path('api/', include(router.urls)),
    path('admin/', admin.site.urls),
    path('api-auth/', include('rest_framework.urls')),
]
