"""Main API URL router for /api/v1/."""
from django.urls import path

from api.v1 import report_views

app_name = 'api'
urlpatterns = [
    # Daily reports
    path('reports/daily/generate/', report_views.GenerateDailyReportView.as_view(), name='daily-report-generate'),
    path('reports/daily/<str:shift_date>/pdf/', report_views.DailyReportPDFView.as_view(), name='daily-report-pdf'),
    path('reports/list/', report_views.ReportListView.as_view(), name='report-list'),
    path('reports/search/', report_views.ReportSearchView.as_view(), name='report-search'),
    path('reports/export-range/', report_views.ReportExportRangeView.as_view(), name='report-export-range'),
    path('reports/<uuid:report_id>/json/', report_views.ReportJSONView.as_view(), name='report-json'),
    path('reports/<uuid:report_id>/pdf/', report_views.ReportPDFView.as_view(), name='report-pdf'),
]
