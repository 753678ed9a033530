import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backup.exceptions import ImportInProgressError, SnapshotError, StrategyError
from backup.models import BackupImport
from backup.preview import preview_snapshot
from backup.reconciler import run_backup_import
from backup.serializers import BackupImportSerializer
from backup.snapshot import check_size, validate_snapshot
from backup.strategies import STRATEGY_SKIP, check_strategy

logger = logging.getLogger(__name__)


def _read_upload(upload):
    """Reject oversize uploads before reading them into memory."""
    check_size(upload.size)
    return upload.read()


class BackupImportView(APIView):
    """
    PUT  /api/backup/import/  — preview a snapshot (multipart 'file'); no writes.
    POST /api/backup/import/  — import a snapshot (multipart 'file', 'strategy').

    Returns 400 with {"error": ...} for a missing file, an invalid snapshot
    or an unknown strategy, and 409 while another import for the same user
    is running. Per-record failures do not change the status code; they are
    listed in the result.
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def put(self, request):
        upload = request.FILES.get('file')
        if not upload:
            return Response({'error': 'No file provided'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            raw = _read_upload(upload)
            preview = preview_snapshot(request.user, raw, file_name=upload.name)
        except SnapshotError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except Exception:
            logger.exception("Unhandled error in BackupImportView.put")
            return Response({'error': 'Failed to validate backup'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(preview)

    def post(self, request):
        upload = request.FILES.get('file')
        if not upload:
            return Response({'error': 'No file provided'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            strategy = check_strategy(request.data.get('strategy') or STRATEGY_SKIP)
            snapshot = validate_snapshot(_read_upload(upload))
            summary = run_backup_import(request.user, snapshot, strategy, file_name=upload.name)
        except (SnapshotError, StrategyError) as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except ImportInProgressError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_409_CONFLICT)
        except Exception:
            logger.exception("Unhandled error in BackupImportView.post")
            return Response({'error': 'Failed to import backup'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(summary.to_dict())


class BackupImportViewSet(viewsets.ReadOnlyModelViewSet):
    """Past backup imports. Users see their own; staff see everyone's."""
    queryset = BackupImport.objects.select_related('user')
    serializer_class = BackupImportSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status', 'strategy']

    def get_queryset(self):
        qs = super().get_queryset()
        user = self.request.user
        if user.is_staff or user.is_superuser:
            return qs
        return qs.filter(user=user)
