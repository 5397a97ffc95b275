"""
URL configuration for the folio_site project.

Public read endpoints live under /api/, the content-management write API
under /api/admin/.
"""

import os

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import routers
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from showcase import views as showcase_views

router = routers.DefaultRouter(trailing_slash=False)
router.register(r"projects", showcase_views.ProjectViewSet, basename="project")
router.register(r"admin/projects", showcase_views.AdminProjectViewSet, basename="admin-project")
router.register(r"admin/tags", showcase_views.AdminTagViewSet, basename="admin-tag")
router.register(r"admin/tech-stack", showcase_views.AdminTechViewSet, basename="admin-tech")
router.register(r"admin/tech-links", showcase_views.AdminTechLinkViewSet, basename="admin-tech-link")
router.register(r"admin/components", showcase_views.AdminComponentViewSet, basename="admin-component")
router.register(r"admin/resume/sections", showcase_views.AdminResumeSectionViewSet, basename="admin-resume-section")
router.register(r"admin/resume/entries", showcase_views.AdminResumeEntryViewSet, basename="admin-resume-entry")
router.register(r"admin/resume/bullets", showcase_views.AdminResumeBulletViewSet, basename="admin-resume-bullet")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health", lambda request: JsonResponse({"status": "ok"})),
    path(
        "api/info",
        lambda request: JsonResponse(
            {
                "app": "folio-site",
                "env": os.environ.get("DJANGO_ENV", "dev"),
                "debug": settings.DEBUG,
                "version": "1.0.0",
            }
        ),
    ),
    path("api/resume", showcase_views.ResumeView.as_view(), name="resume"),
    path("api/theme", showcase_views.ThemeView.as_view(), name="theme"),
    path("api/admin/resume/basic-info", showcase_views.BasicInfoView.as_view(), name="admin-basic-info"),
    path("api/admin/reorder", showcase_views.ReorderView.as_view(), name="admin-reorder"),
    path("api/admin/upload-image", showcase_views.UploadImageView.as_view(), name="admin-upload-image"),
    path("api/admin/upload-media", showcase_views.UploadMediaView.as_view(), name="admin-upload-media"),
    path("api/auth/jwt/create", TokenObtainPairView.as_view(), name="jwt-create"),
    path("api/auth/jwt/refresh", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="docs"),
    path("api/", include(router.urls)),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
