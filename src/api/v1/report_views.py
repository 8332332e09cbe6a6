"""
Daily operations report API views.

Endpoints:
- POST reports/daily/generate/        compile, store and optionally email
- GET  reports/daily/<date>/pdf/      live render, nothing stored
- GET  reports/list/                  stored reports, newest first
- GET  reports/search/?q=             match on date or variance block
- GET  reports/export-range/          ZIP of stored reports in a date range
- GET  reports/<id>/json/             stored payload
- GET  reports/<id>/pdf/              re-rendered from the stored payload
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.report_filters import DailyReportFilter
from api.v1.report_serializers import (
    DailyReportListSerializer,
    DateRangeQuerySerializer,
    GenerateReportQuerySerializer,
    ShiftDateSerializer,
)
from core.export import zip_response
from core.pdf import pdf_response
from reports.documents import render_daily_report, report_filename
from reports.exceptions import (
    DeliveryError,
    NotFoundError,
    PersistenceError,
    RenderError,
    ReportInProgressError,
    ValidationError,
)
from reports.models import DailyReport
from reports.services import (
    compile_report,
    render_stored_report,
    reports_in_range,
    run_report_pipeline,
    search_reports,
)

logger = logging.getLogger("backoffice")


def _error(message, status_code, **extra):
    return Response({"ok": False, "error": message, **extra}, status=status_code)


def _invalid(serializer):
    return _error("Invalid request parameters.", status.HTTP_400_BAD_REQUEST, errors=serializer.errors)


def _listing(queryset):
    return Response({
        "ok": True,
        "reports": DailyReportListSerializer(queryset, many=True).data,
    })


class GenerateDailyReportView(APIView):
    """Run the report pipeline for ``?date=YYYY-MM-DD``.

    ``sendEmail=true`` also emails the PDF. The report is stored before the
    email is sent, so a 502 still leaves a saved report.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        query = GenerateReportQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid(query)
        shift_date = query.validated_data["date"]
        send_email = query.validated_data["send_email"]

        try:
            run = run_report_pipeline(shift_date, send_email=send_email)
        except NotFoundError as exc:
            logger.info("Report generation for %s: %s", shift_date, exc)
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        except ReportInProgressError as exc:
            return _error(str(exc), status.HTTP_409_CONFLICT)
        except DeliveryError as exc:
            report_id = DailyReport.objects.filter(date=shift_date).values_list("pk", flat=True).first()
            return _error(
                str(exc),
                status.HTTP_502_BAD_GATEWAY,
                reportId=str(report_id) if report_id else None,
                date=shift_date.isoformat(),
                emailed=False,
            )
        except PersistenceError as exc:
            logger.exception("Report generation for %s failed.", shift_date, extra={"step": "persist"})
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        except RenderError as exc:
            logger.exception("Report generation for %s failed.", shift_date, extra={"step": "render"})
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            "ok": True,
            "reportId": run.report_id,
            "date": shift_date.isoformat(),
            "emailed": run.emailed,
        })


class DailyReportPDFView(APIView):
    """Compile the live ledger for a date and return the PDF inline."""

    permission_classes = [IsAuthenticated]

    def get(self, request, shift_date):
        query = ShiftDateSerializer(data={"date": shift_date})
        if not query.is_valid():
            return _invalid(query)
        target = query.validated_data["date"]

        try:
            report = compile_report(target)
        except NotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        except PersistenceError as exc:
            logger.exception("Live report render for %s failed.", target, extra={"step": "compile"})
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

        try:
            document = render_daily_report(report)
        except RenderError as exc:
            logger.exception("Live report render for %s failed.", target, extra={"step": "render"})
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return pdf_response(document, report_filename(target))


class ReportListView(APIView):
    """GET reports/list/ with optional ``date_from`` / ``date_to``."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        queryset = DailyReport.objects.only("id", "date", "created_at").order_by("-date")
        report_filter = DailyReportFilter(request.query_params, queryset=queryset)
        if not report_filter.is_valid():
            return _error("Invalid filters.", status.HTTP_400_BAD_REQUEST, errors=report_filter.errors)
        return _listing(report_filter.qs)


class ReportSearchView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            reports = search_reports(request.query_params.get("q", ""))
        except ValidationError as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        return _listing(reports)


class ReportExportRangeView(APIView):
    """ZIP archive with one PDF per stored report in ``[start, end]``."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = DateRangeQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid(query)
        start = query.validated_data["start"]
        end = query.validated_data["end"]

        try:
            files = [
                (report_filename(daily_report.date), render_stored_report(daily_report))
                for daily_report in reports_in_range(start, end)
            ]
        except RenderError as exc:
            logger.exception("Export of %s..%s failed.", start, end, extra={"step": "render"})
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.info("Exporting %d daily report(s) for %s..%s", len(files), start, end)
        return zip_response(files, f"Daily-Reports-{start}-to-{end}")


class ReportJSONView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, report_id):
        daily_report = DailyReport.objects.filter(pk=report_id).first()
        if daily_report is None:
            return _error("Report not found.", status.HTTP_404_NOT_FOUND)
        return Response({"ok": True, "report": daily_report.payload})


class ReportPDFView(APIView):
    """Re-render a stored report; the live ledger is not consulted."""

    permission_classes = [IsAuthenticated]

    def get(self, request, report_id):
        daily_report = DailyReport.objects.filter(pk=report_id).first()
        if daily_report is None:
            return _error("Report not found.", status.HTTP_404_NOT_FOUND)
        try:
            document = render_stored_report(daily_report)
        except RenderError as exc:
            logger.exception("Render of stored report %s failed.", report_id, extra={"step": "render"})
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return pdf_response(document, report_filename(daily_report.date))
