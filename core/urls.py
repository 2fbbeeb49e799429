"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("api/charts/<str:metric_id>/", views.chart_api, name="chart_api"),
]
