"""Serializers for the daily report API."""
from rest_framework import serializers

from reports.models import DailyReport


class GenerateReportQuerySerializer(serializers.Serializer):
    """Query parameters of ``POST reports/daily/generate/``."""

    date = serializers.DateField(input_formats=["%Y-%m-%d"])
    sendEmail = serializers.BooleanField(source="send_email", required=False, default=False)


class ShiftDateSerializer(serializers.Serializer):
    date = serializers.DateField(input_formats=["%Y-%m-%d"])


class DateRangeQuerySerializer(serializers.Serializer):
    """Inclusive ``start`` / ``end`` range for archive export."""

    start = serializers.DateField(input_formats=["%Y-%m-%d"])
    end = serializers.DateField(input_formats=["%Y-%m-%d"])

    def validate(self, attrs):
        if attrs["start"] > attrs["end"]:
            raise serializers.ValidationError("start must be on or before end.")
        return attrs


class DailyReportListSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = DailyReport
        fields = ["id", "date", "createdAt"]
