from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView

from src.users.views import (
    ThrottledTokenObtainPairView,
    ThrottledTokenRefreshView,
)

urlpatterns = [
    path("admin/", admin.site.urls),

    # OpenAPI schema
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),

    # API
    path("api/v1/", include("src.campgrounds.urls", namespace="campgrounds")),
    path("api/v1/payments/", include("src.payments.urls", namespace="payments")),
    path("api/v1/auth/", include("src.users.urls", namespace="users")),
    path("api/v1/auth/token/", ThrottledTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/v1/auth/token/refresh/", ThrottledTokenRefreshView.as_view(), name="token_refresh"),
]
