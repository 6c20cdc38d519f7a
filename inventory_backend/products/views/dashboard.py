# products/views/dashboard.py

from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from products.services.dashboard import dashboard_summary


class DashboardView(APIView):
    """GET /api/dashboard/ - ledger-wide stock counts."""

    @extend_schema(
        responses={
            200: {
                "type": "object",
                "properties": {
                    "totalProducts": {"type": "integer"},
                    "lowStockCount": {"type": "integer"},
                    "nearExpiryCount": {"type": "integer"},
                    "expiredCount": {"type": "integer"},
                    "totalStockQuantity": {"type": "integer"},
                },
            }
        },
    )
    def get(self, request):
        return Response(dashboard_summary())
