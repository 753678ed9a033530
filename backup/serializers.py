from rest_framework import serializers

from .models import BackupImport


class BackupImportSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)

    class Meta:
        model = BackupImport
        fields = [
                'id',
                'username',
                'status',
                'strategy',
                'file_name',
                'backup_date',
                'backup_email',
                'result',
                'created_at',
                'updated_at',
                ]
        read_only_fields = fields
