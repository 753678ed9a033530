from django.conf import settings
from django.db import models

import uuid

from backup.strategies import STRATEGY_CHOICES, STRATEGY_SKIP


class BackupImport(models.Model):
    """One backup import run: audit trail and per-owner import lock."""
    STATUS_CHOICES = [
        ('running', 'Running'),
        ('completed', 'Completed'),
        ('failed', 'Failed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='backup_imports')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='running')
    strategy = models.CharField(max_length=20, choices=STRATEGY_CHOICES, default=STRATEGY_SKIP)
    file_name = models.CharField(max_length=254, blank=True)
    # Echoed from the snapshot for audit only
    backup_date = models.CharField(max_length=64, blank=True)
    backup_email = models.CharField(max_length=254, blank=True)
    result = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"BackupImport {self.id} ({self.status}) - {self.user}"
