# mood/views.py
from collections import Counter, defaultdict

from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Avg, Count
from django.db.models.functions import TruncDate
from django.utils.dateparse import parse_date
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from core.exceptions import ConflictError
from core.shortcuts import get_object_or_404
from mood.models import MoodEntry, day_bounds
from mood.serializers import MoodEntrySerializer
import logging

logger = logging.getLogger(__name__)

TREND_PERIODS = {"week": 7, "month": 30, "quarter": 90}
DEFAULT_STATS_DAYS = 30


def parse_days(value, default=DEFAULT_STATS_DAYS):
    try:
        days = int(value)
    except (TypeError, ValueError):
        return default
    return days if days > 0 else default


@extend_schema_view(
    list=extend_schema(
        description="List mood entries for the authenticated user, newest first",
        summary="List Mood Entries",
        tags=["Mood"],
        parameters=[
            OpenApiParameter(name="start_date", type=OpenApiTypes.DATE, description="Filter by start date (YYYY-MM-DD)"),
            OpenApiParameter(name="end_date", type=OpenApiTypes.DATE, description="Filter by end date (YYYY-MM-DD), inclusive"),
            OpenApiParameter(name="mood", type=OpenApiTypes.STR),
        ],
    ),
    create=extend_schema(summary="Log Today's Mood", tags=["Mood"]),
    update=extend_schema(summary="Update Mood Entry", tags=["Mood"]),
    partial_update=extend_schema(summary="Partially Update Mood Entry", tags=["Mood"]),
    destroy=extend_schema(summary="Delete Mood Entry", tags=["Mood"]),
)
class MoodEntryViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """ViewSet for daily mood tracking and its statistics"""
    serializer_class = MoodEntrySerializer
    filter_backends = []
    page_size = 30

    def get_queryset(self):
        """Get mood entries for the current user with filtering"""
        queryset = MoodEntry.objects.for_user(self.request.user)

        if self.action == "list":
            start_date = parse_date(self.request.query_params.get("start_date") or "")
            end_date = parse_date(self.request.query_params.get("end_date") or "")
            if start_date and end_date:
                queryset = queryset.filter(
                    created_at__gte=day_bounds(start_date)[0],
                    created_at__lt=day_bounds(end_date)[1],
                )

            mood = self.request.query_params.get("mood")
            if mood:
                queryset = queryset.filter(mood=mood)

        return queryset.order_by("-created_at", "-id")

    def get_owned_entry(self, verb):
        entry = get_object_or_404(MoodEntry.objects.all(), "Mood entry not found", pk=self.kwargs["pk"])
        if entry.user_id != self.request.user.id:
            return entry, Response(
                {"error": f"Not authorized to {verb} this entry"},
                status=status.HTTP_403_FORBIDDEN,
            )
        return entry, None

    def create(self, request, *args, **kwargs):
        existing = MoodEntry.objects.for_user(request.user).on_day().first()
        if existing:
            raise ConflictError(
                "Mood entry already exists for today",
                existing=MoodEntrySerializer(existing).data,
            )

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = serializer.save(user=request.user)
        return Response(
            {"message": "Mood entry created successfully", "entry": self.get_serializer(entry).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        entry, denied = self.get_owned_entry("edit")
        if denied:
            return denied

        serializer = self.get_serializer(entry, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"message": "Mood entry updated successfully", "entry": serializer.data})

    def destroy(self, request, *args, **kwargs):
        entry, denied = self.get_owned_entry("delete")
        if denied:
            return denied

        entry.delete()
        return Response({"message": "Mood entry deleted successfully"})

    @extend_schema(summary="Today's Mood", tags=["Mood"], responses=MoodEntrySerializer)
    @action(detail=False, methods=["get"])
    def today(self, request):
        entry = MoodEntry.objects.for_user(request.user).on_day().first()
        return Response({"entry": self.get_serializer(entry).data if entry else None})

    @extend_schema(
        summary="Mood Overview",
        tags=["Mood"],
        parameters=[OpenApiParameter(name="days", type=OpenApiTypes.INT, description="Window in days (default: 30)")],
    )
    @action(detail=False, methods=["get"], url_path="stats/overview")
    def stats_overview(self, request):
        """Per-mood averages and the daily intensity trend"""
        try:
            entries = MoodEntry.objects.for_user(request.user).since_days(
                parse_days(request.query_params.get("days"))
            )
            stats = list(
                entries.values("mood")
                .annotate(
                    count=Count("id"),
                    avg_intensity=Avg("intensity"),
                    avg_stress_level=Avg("stress_level"),
                    avg_energy_level=Avg("energy_level"),
                    avg_sleep_hours=Avg("sleep_hours"),
                )
                .order_by("-count", "mood")
            )
            intensity_trend = list(
                entries.annotate(date=TruncDate("created_at"))
                .values("date")
                .annotate(
                    avg_intensity=Avg("intensity"),
                    avg_stress_level=Avg("stress_level"),
                    avg_energy_level=Avg("energy_level"),
                )
                .order_by("date")
            )
            return Response(
                {
                    "stats": stats,
                    "intensity_trend": intensity_trend,
                    "total_entries": sum(stat["count"] for stat in stats),
                }
            )
        except Exception as e:
            logger.error(f"Error computing mood overview: {str(e)}")
            return Response(
                {"error": "Failed to fetch mood statistics"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @extend_schema(
        summary="Mood Trends",
        tags=["Mood"],
        parameters=[OpenApiParameter(name="period", type=OpenApiTypes.STR, enum=list(TREND_PERIODS))],
    )
    @action(detail=False, methods=["get"], url_path="stats/trends")
    def stats_trends(self, request):
        """Entry count and average intensity per day and mood"""
        period = request.query_params.get("period", "week")
        days = TREND_PERIODS.get(period, DEFAULT_STATS_DAYS)
        try:
            trends = (
                MoodEntry.objects.for_user(request.user)
                .since_days(days)
                .annotate(date=TruncDate("created_at"))
                .values("date", "mood")
                .annotate(count=Count("id"), avg_intensity=Avg("intensity"))
                .order_by("date", "mood")
            )
            return Response({"trends": list(trends)})
        except Exception as e:
            logger.error(f"Error computing mood trends: {str(e)}")
            return Response(
                {"error": "Failed to fetch mood trends"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @extend_schema(
        summary="Activity Statistics",
        tags=["Mood"],
        parameters=[OpenApiParameter(name="days", type=OpenApiTypes.INT, description="Window in days (default: 30)")],
    )
    @action(detail=False, methods=["get"], url_path="stats/activities")
    def stats_activities(self, request):
        """How often each activity was logged and the average intensity alongside it"""
        entries = MoodEntry.objects.for_user(request.user).since_days(
            parse_days(request.query_params.get("days"))
        )

        counts = Counter()
        intensities = defaultdict(list)
        for activities, intensity in entries.values_list("activities", "intensity"):
            for activity in activities or []:
                counts[activity] += 1
                intensities[activity].append(intensity)

        activity_stats = [
            {
                "activity": activity,
                "count": count,
                "avg_mood_intensity": sum(intensities[activity]) / count,
            }
            for activity, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        ]
        return Response({"activity_stats": activity_stats})
