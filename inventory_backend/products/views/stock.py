"""
======================================================
PATH: products/views/stock.py
======================================================
STOCK VIEWSET

Endpoints:
- POST /api/stock/in/    bulk stock-in  (200 all ok / 207 partial)
- POST /api/stock/out/   bulk FEFO stock-out (200 / 207, 409 insufficient stock)
- GET  /api/stock/logs/  grouped movement log

RULES:
- Request bodies are validated before any service runs (400 on failure).
- Each bulk call runs in ONE transaction (service-level @transaction.atomic).
- Unexpected errors roll the call back and answer 500.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from products.serializers.stock import StockInRequestSerializer, StockOutRequestSerializer
from products.services.exceptions import InsufficientStockError, StockLogQueryError
from products.services.stock_fefo import stock_out_items
from products.services.stock_in import stock_in_items
from products.services.stock_logs import get_stock_logs

logger = logging.getLogger(__name__)


def invalid_request(errors) -> Response:
    return Response(
        {"error": "Invalid request", "details": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def internal_error(exc: Exception) -> Response:
    return Response(
        {"error": "Internal server error", "message": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bulk_response(outcome) -> Response:
    code = status.HTTP_200_OK if outcome.all_succeeded else status.HTTP_207_MULTI_STATUS
    return Response(
        {
            "sessionId": str(outcome.session_id),
            "results": [r.to_dict() for r in outcome.results],
        },
        status=code,
    )


class StockViewSet(viewsets.ViewSet):
    """
    Bulk stock movements + movement log.
    """

    @extend_schema(
        request=StockInRequestSerializer,
        responses={
            200: OpenApiResponse(description="All items stocked in"),
            207: OpenApiResponse(description="Some items failed (see results)"),
            400: OpenApiResponse(description="Invalid request"),
        },
    )
    @action(detail=False, methods=["post"], url_path="in", url_name="in")
    def stock_in(self, request):
        serializer = StockInRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)

        try:
            outcome = stock_in_items(items=serializer.to_stock_items())
        except Exception as exc:
            logger.exception("Stock-in failed")
            return internal_error(exc)

        return _bulk_response(outcome)

    @extend_schema(
        request=StockOutRequestSerializer,
        responses={
            200: OpenApiResponse(description="All items stocked out"),
            207: OpenApiResponse(description="Some items failed (see results)"),
            400: OpenApiResponse(description="Invalid request"),
            409: OpenApiResponse(description="Insufficient stock; nothing was applied"),
        },
    )
    @action(detail=False, methods=["post"], url_path="out", url_name="out")
    def stock_out(self, request):
        serializer = StockOutRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)

        try:
            outcome = stock_out_items(items=serializer.to_stock_items())
        except InsufficientStockError as exc:
            return Response(
                {
                    "error": "Insufficient stock",
                    "message": str(exc),
                    "barcode": exc.barcode,
                    "requested": exc.requested,
                    "available": exc.available,
                },
                status=status.HTTP_409_CONFLICT,
            )
        except Exception as exc:
            logger.exception("Stock-out failed")
            return internal_error(exc)

        return _bulk_response(outcome)

    @extend_schema(
        parameters=[
            OpenApiParameter("type", str, enum=["IN", "OUT"]),
            OpenApiParameter("fromDate", str, description="YYYY-MM-DD"),
            OpenApiParameter("toDate", str, description="YYYY-MM-DD"),
            OpenApiParameter(
                "filter",
                str,
                enum=["today", "7days"],
                description="Shorthand period; overrides fromDate/toDate",
            ),
        ],
        responses={200: OpenApiResponse(description="Grouped movement log")},
    )
    @action(detail=False, methods=["get"], url_path="logs", url_name="logs")
    def logs(self, request):
        try:
            data = get_stock_logs(request.query_params)
        except StockLogQueryError as exc:
            return invalid_request(exc.errors)
        except Exception as exc:
            logger.exception("Stock log query failed")
            return internal_error(exc)

        return Response(data, status=status.HTTP_200_OK)
