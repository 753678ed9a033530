from django.contrib import admin

from .models import BackupImport


@admin.register(BackupImport)
class BackupImportAdmin(admin.ModelAdmin):
    list_display = ['user', 'status', 'strategy', 'file_name', 'backup_date', 'created_at']
    list_filter = ['status', 'strategy']
    readonly_fields = ['id', 'user', 'strategy', 'file_name', 'backup_date', 'backup_email',
                       'result', 'created_at', 'updated_at']
