import logging

from django.db import DatabaseError
from django.db.models import Q
from django.utils.dateparse import parse_date
from rest_framework import views, status, permissions
from rest_framework.response import Response

from .models import Document, DocumentEdit
from .serializers import (
    DocumentSerializer, DocumentDetailsSerializer,
    DocumentUpdateSerializer, DocumentEditSerializer,
)
from .extraction import extract_document_info
from .s3_utils import upload_document_file, delete_s3_key
from .utils import validate_file

logger = logging.getLogger(__name__)

# API name -> model field
EDITABLE_FIELDS = {
    'name': 'name',
    'type': 'type',
    'provider': 'provider',
    'policy_number': 'policy_number',
    'premium': 'premium_amount',
    'due_date': 'end_date',
}


def _json_value(value):
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return value


def _parse_due_date(value):
    if isinstance(value, str):
        return parse_date(value)
    return value


class DocumentListCreateView(views.APIView):
    """
    GET /api/documents/ — List the caller's documents
    POST /api/documents/ — Upload a document
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        documents = Document.objects.filter(owner=request.user).select_related('owner')

        search = request.query_params.get('search', '').strip()
        if search:
            documents = documents.filter(
                Q(name__icontains=search)
                | Q(provider__icontains=search)
                | Q(policy_number__icontains=search)
            )

        doc_type = request.query_params.get('type', '').strip()
        if doc_type and doc_type.lower() != 'all':
            documents = documents.filter(type__iexact=doc_type)

        return Response(DocumentSerializer(documents, many=True).data)

    def post(self, request):
        file = request.FILES.get('file')
        is_valid, error = validate_file(file)
        if not is_valid:
            logger.warning("Upload rejected for user_id=%s: %s", request.user.id, error)
            return Response({"error": error}, status=status.HTTP_400_BAD_REQUEST)

        serializer = DocumentDetailsSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        # Supplied values win over the filename heuristics
        details = extract_document_info(file.name)
        details.update({k: v for k, v in serializer.validated_data.items() if v not in (None, '')})
        name = details.get('name') or f"{details['type']} Insurance"

        upload = upload_document_file(request.user.id, file, file.name, content_type=file.content_type)
        if upload['error']:
            logger.error("Upload failed for user_id=%s: %s", request.user.id, upload['error'])
            return Response({"error": upload['error']}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        try:
            doc = Document.objects.create(
                owner=request.user,
                name=name,
                type=details['type'],
                provider=details.get('provider') or '',
                policy_number=details.get('policy_number') or '',
                premium_amount=details.get('premium') or '',
                end_date=_parse_due_date(details.get('due_date')),
                file_url=upload['file_url'],
                s3_key=upload['s3_key'],
                file_type=file.content_type or '',
                file_size=file.size,
                shared=False,
            )
        except DatabaseError as e:
            logger.error("Document insert failed, removing %s: %s", upload['s3_key'], e)
            delete_s3_key(upload['s3_key'])
            return Response({"error": "Failed to save document."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info("Document %s uploaded by user_id=%s", doc.id, request.user.id)
        return Response(DocumentSerializer(doc).data, status=status.HTTP_201_CREATED)


class ExtractDocumentInfoView(views.APIView):
    """POST /api/documents/extract/ — Preview extracted metadata without storing anything."""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        file = request.FILES.get('file')
        is_valid, error = validate_file(file)
        if not is_valid:
            return Response({"error": error}, status=status.HTTP_400_BAD_REQUEST)

        info = extract_document_info(file.name)
        info['name'] = f"{info['type']} Insurance"
        return Response(info)


class SharedWithMeView(views.APIView):
    """GET /api/documents/shared/ — Documents other users shared with the caller."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        documents = Document.objects.filter(
            shares__shared_with=request.user
        ).select_related('owner').distinct()

        search = request.query_params.get('search', '').strip()
        if search:
            documents = documents.filter(
                Q(name__icontains=search)
                | Q(provider__icontains=search)
                | Q(owner__name__icontains=search)
            )

        return Response(DocumentSerializer(documents, many=True).data)


class DocumentDetailView(views.APIView):
    """
    GET /api/documents/{id}/ — Detail for the owner or a grantee
    PATCH /api/documents/{id}/ — Owner edits metadata
    DELETE /api/documents/{id}/ — Owner deletes row and stored file
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        doc = Document.objects.filter(
            Q(owner=request.user) | Q(shares__shared_with=request.user), id=pk
        ).select_related('owner').distinct().first()
        if not doc:
            return Response({"error": "Document not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(DocumentSerializer(doc).data)

    def patch(self, request, pk):
        try:
            doc = Document.objects.get(id=pk, owner=request.user)
        except Document.DoesNotExist:
            return Response({"error": "Document not found."}, status=status.HTTP_404_NOT_FOUND)

        disallowed_fields = set(request.data.keys()) - set(EDITABLE_FIELDS)
        if disallowed_fields:
            return Response({
                "error": f"Cannot update: {', '.join(sorted(disallowed_fields))}"
            }, status=status.HTTP_400_BAD_REQUEST)

        serializer = DocumentUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        previous_value = {}
        new_value = {}
        changed_fields = []
        for api_field, value in serializer.validated_data.items():
            model_field = EDITABLE_FIELDS[api_field]
            if value is None and model_field != 'end_date':
                value = ''
            current = getattr(doc, model_field)
            if current == value:
                continue
            previous_value[api_field] = _json_value(current)
            new_value[api_field] = _json_value(value)
            setattr(doc, model_field, value)
            changed_fields.append(model_field)

        if changed_fields:
            # `shared` is owned by refresh_shared_flag(), never written from here
            doc.save(update_fields=[*changed_fields, 'updated_at'])
            DocumentEdit.objects.create(
                document=doc,
                editor=request.user,
                edit_type='update',
                previous_value=previous_value,
                new_value=new_value,
            )
            logger.info("Document %s updated by user_id=%s: %s", doc.id, request.user.id, sorted(new_value))

        doc.refresh_from_db(fields=['shared'])
        return Response(DocumentSerializer(doc).data)

    def delete(self, request, pk):
        try:
            doc = Document.objects.get(id=pk, owner=request.user)
        except Document.DoesNotExist:
            return Response({"error": "Document not found."}, status=status.HTTP_404_NOT_FOUND)

        s3_key = doc.s3_key
        doc.delete()
        logger.info("Document %s deleted by user_id=%s", pk, request.user.id)

        if s3_key and not delete_s3_key(s3_key):
            logger.warning("Stored file %s could not be removed for document %s", s3_key, pk)

        return Response(status=status.HTTP_204_NO_CONTENT)


class DocumentEditListView(views.APIView):
    """GET /api/documents/{id}/edits/ — Edit log, owner only."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        if not Document.objects.filter(id=pk, owner=request.user).exists():
            return Response({"error": "Document not found."}, status=status.HTTP_404_NOT_FOUND)

        edits = DocumentEdit.objects.filter(document_id=pk).select_related('editor')
        return Response(DocumentEditSerializer(edits, many=True).data)
