# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Product list (search / status filter / pagination), create, and
  detail-by-barcode, each carrying stock figures.

Key rule alignment:
- Stock figures come from annotate_stock() (single query per page).
- Detail lookup is by barcode, not id.
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from products.serializers.product import (
    ProductCreateSerializer,
    ProductListQuerySerializer,
    ProductStockSerializer,
)
from products.services.exceptions import ProductNotFoundError
from products.services.product_list import (
    PRODUCT_STATUSES,
    get_product_by_barcode,
    list_products,
)
from products.views.stock import invalid_request


class ProductViewSet(viewsets.ViewSet):
    """
    Product endpoints.

    - GET  /api/products/?search=&page=&limit=&status=
    - POST /api/products/
    - GET  /api/products/<barcode>/
    """

    lookup_field = "barcode"
    lookup_value_regex = "[^/]+"

    @extend_schema(
        parameters=[
            OpenApiParameter("search", str, description="Name or barcode, case-insensitive"),
            OpenApiParameter("page", int),
            OpenApiParameter("limit", int, description="Max 100"),
            OpenApiParameter("status", str, enum=list(PRODUCT_STATUSES)),
        ],
        responses={200: ProductStockSerializer(many=True)},
    )
    def list(self, request):
        query = ProductListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return invalid_request(query.errors)

        params = query.validated_data
        page = list_products(
            search=params.get("search"),
            page=params["page"],
            limit=params["limit"],
            status=params.get("status"),
        )

        return Response(
            {
                "data": ProductStockSerializer(page.products, many=True).data,
                "pagination": {
                    "page": page.page,
                    "limit": page.limit,
                    "total": page.total,
                    "totalPages": page.total_pages,
                },
            }
        )

    @extend_schema(
        request=ProductCreateSerializer,
        responses={201: ProductCreateSerializer, 400: OpenApiResponse(description="Invalid request")},
    )
    def create(self, request):
        serializer = ProductCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)

        product = serializer.save()
        return Response(ProductCreateSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ProductStockSerializer, 404: OpenApiResponse(description="Not found")})
    def retrieve(self, request, barcode=None):
        try:
            product = get_product_by_barcode(barcode)
        except ProductNotFoundError as exc:
            return Response(
                {"error": "Product not found", "message": str(exc)},
                status=status.HTTP_404_NOT_FOUND,
            )

        return Response(ProductStockSerializer(product).data)
