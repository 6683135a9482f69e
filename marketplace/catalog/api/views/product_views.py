from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import (
    invalid_id_response,
    parse_id,
    service_response,
    validation_error_response,
)
from marketplace.api.serializers import (
    DeletedCountResponseSerializer,
    ErrorResponseSerializer,
    ProductListResponseSerializer,
    ProductPageResponseSerializer,
    ProductResponseSerializer,
    SuccessResponseSerializer,
)
from marketplace.catalog.api.serializers.product_serializers import (
    DeleteCategorySerializer,
    PriceDiscountSerializer,
    ProductFilterSerializer,
    ProductSearchSerializer,
    ProductSerializer,
    ProductWriteSerializer,
)
from marketplace.permissions import IsSellerUser
from marketplace.services import CatalogService

SELLER_ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid token"),
    403: OpenApiResponse(response=ErrorResponseSerializer, description="Seller role required"),
}


def render_product(product):
    return {"product": ProductSerializer(product).data}


def render_products(products):
    return {"products": ProductSerializer(products, many=True).data}


def render_page(page):
    return {
        "page": page["page"],
        "totalPages": page["total_pages"],
        "totalResults": page["total_results"],
        "products": ProductSerializer(page["results"], many=True).data,
    }


class ProductViewSet(viewsets.ViewSet):
    """
    Seller catalog management. Every lookup is scoped to the caller's own
    products; somebody else's product is reported as not found.
    """

    permission_classes = [IsAuthenticated, IsSellerUser]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    @extend_schema(
        operation_id="products_list",
        summary="List my products",
        responses={200: ProductListResponseSerializer, **SELLER_ERRORS},
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        result = self.get_service().list_seller_products(request.user)
        return service_response(result, render_products)

    @extend_schema(
        operation_id="products_create",
        summary="Create a product",
        description="""
        **What it receives:**
        - `name`, `sku`, `price`, `category` (required)
        - `discount`, `stock`, `monthlySales` (optional)

        **What it returns:**
        - The created product, owned by the caller
        - 409 when the SKU is already taken
        """,
        request=ProductWriteSerializer,
        responses={
            201: ProductResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid fields"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Duplicate SKU"),
            **SELLER_ERRORS,
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().create_product(request.user, dict(serializer.validated_data))
        return service_response(result, render_product, status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_bulk_create",
        summary="Create several products at once",
        description="All-or-nothing: a duplicate SKU anywhere in the batch creates nothing.",
        request=ProductWriteSerializer(many=True),
        responses={
            201: ProductListResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid fields"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Duplicate SKUs"),
            **SELLER_ERRORS,
        },
        tags=["Marketplace - Products"],
    )
    def bulk_create(self, request):
        serializer = ProductWriteSerializer(data=request.data, many=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        items = [dict(item) for item in serializer.validated_data]
        result = self.get_service().bulk_create_products(request.user, items)
        return service_response(result, render_products, status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get one of my products",
        responses={
            200: ProductResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            **SELLER_ERRORS,
        },
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        product_id = parse_id(pk)
        if product_id is None:
            return invalid_id_response()

        result = self.get_service().get_seller_product(request.user, product_id)
        return service_response(result, render_product)

    @extend_schema(
        operation_id="products_update",
        summary="Update one of my products",
        description="Partial update; the owner cannot change and review fields are ignored.",
        request=ProductWriteSerializer,
        responses={
            200: ProductResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Duplicate SKU"),
            **SELLER_ERRORS,
        },
        tags=["Marketplace - Products"],
    )
    def update(self, request, pk=None):
        product_id = parse_id(pk)
        if product_id is None:
            return invalid_id_response()

        serializer = ProductWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().update_product(request.user, product_id, dict(serializer.validated_data))
        return service_response(result, render_product)

    @extend_schema(
        operation_id="products_price_discount",
        summary="Change price and/or discount",
        request=PriceDiscountSerializer,
        responses={
            200: ProductResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid price or discount"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            **SELLER_ERRORS,
        },
        tags=["Marketplace - Products"],
    )
    def price_discount(self, request, pk=None):
        product_id = parse_id(pk)
        if product_id is None:
            return invalid_id_response()

        serializer = PriceDiscountSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().update_price_discount(
            request.user,
            product_id,
            price=serializer.validated_data.get("price"),
            discount=serializer.validated_data.get("discount"),
        )
        return service_response(result, render_product)

    @extend_schema(
        operation_id="products_destroy",
        summary="Delete one of my products",
        responses={
            200: SuccessResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            **SELLER_ERRORS,
        },
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        product_id = parse_id(pk)
        if product_id is None:
            return invalid_id_response()

        result = self.get_service().delete_product(request.user, product_id)
        return service_response(result, lambda _: {"message": "Product deleted"})

    @extend_schema(
        operation_id="products_destroy_category",
        summary="Delete all my products in a category",
        request=DeleteCategorySerializer,
        responses={200: DeletedCountResponseSerializer, **SELLER_ERRORS},
        tags=["Marketplace - Products"],
    )
    def destroy_category(self, request):
        data = request.data if request.data else request.query_params
        serializer = DeleteCategorySerializer(data=data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().delete_by_category(request.user, serializer.validated_data["category"])
        return service_response(result, lambda count: {"deletedCount": count})

    @extend_schema(
        operation_id="products_search",
        summary="Search my products",
        parameters=[ProductSearchSerializer],
        responses={200: ProductListResponseSerializer, **SELLER_ERRORS},
        tags=["Marketplace - Products"],
    )
    def search(self, request):
        serializer = ProductSearchSerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().search_products(request.user, **serializer.validated_data)
        return service_response(result, render_products)

    @extend_schema(
        operation_id="products_filter",
        summary="Filter, sort and paginate my products",
        parameters=[ProductFilterSerializer],
        responses={200: ProductPageResponseSerializer, **SELLER_ERRORS},
        tags=["Marketplace - Products"],
    )
    def filter(self, request):
        serializer = ProductFilterSerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().filter_products(serializer.validated_data, owner=request.user)
        return service_response(result, render_page)


class PublicProductViewSet(viewsets.ViewSet):
    """Global catalog for customers and anonymous visitors."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    @extend_schema(
        operation_id="products_public_list",
        summary="Browse the public catalog",
        parameters=[ProductFilterSerializer],
        responses={200: ProductPageResponseSerializer},
        tags=["Marketplace - Public Catalog"],
    )
    def list(self, request):
        serializer = ProductFilterSerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().filter_products(serializer.validated_data)
        return service_response(result, render_page)

    @extend_schema(
        operation_id="products_public_retrieve",
        summary="Get a product from the public catalog",
        responses={
            200: ProductResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Public Catalog"],
    )
    def retrieve(self, request, pk=None):
        product_id = parse_id(pk)
        if product_id is None:
            return invalid_id_response()

        result = self.get_service().get_public_product(product_id)
        return service_response(result, render_product)
