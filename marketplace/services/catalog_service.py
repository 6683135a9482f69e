"""
CatalogService - Product CRUD & Search

Seller operations are scoped to the products the seller owns: a product that
exists but belongs to someone else is reported as ``not_found``. The public
catalog reads every product.
"""

import logging
from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.core.paginator import EmptyPage, Paginator
from django.db import IntegrityError, transaction
from django.db.models import Q

from marketplace.catalog.domain.models.catalog import normalize_category
from marketplace.models import Product

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()
logger = logging.getLogger(__name__)

REQUIRED_PRODUCT_FIELDS = ("name", "sku", "price", "category")

# API sort keys -> model fields
SORT_FIELDS = {
    "name": "name",
    "sku": "sku",
    "price": "price",
    "discount": "discount",
    "rating": "rating",
    "stock": "stock",
    "category": "category",
    "createdAt": "created_at",
}

DEFAULT_PAGE_SIZE = 10


def duplicate_sku_message(sku: str) -> str:
    return f'Product with SKU "{sku}" already exists'


class CatalogService(BaseService):
    """
    Service for managing product catalog operations.

    Responsibilities:
    - Create products, singly or in bulk (seller only)
    - Get, update and delete products (owner only)
    - Delete a seller's products by category
    - Search and filter, seller-scoped or across the public catalog
    """

    def _owned(self, seller: User):
        return Product.objects.filter(owner=seller)

    def _missing_fields(self, data: Dict[str, Any]) -> List[str]:
        return [field for field in REQUIRED_PRODUCT_FIELDS if data.get(field) in (None, "")]

    @BaseService.log_performance
    def list_seller_products(self, seller: User) -> ServiceResult[List[Product]]:
        """List the seller's products, newest first."""
        try:
            products = list(self._owned(seller).order_by("-created_at"))
            self.logger.info(f"Listed {len(products)} products for seller {seller.id}")
            return service_ok(products)
        except Exception as e:
            self.logger.error(f"Error listing products for seller {seller.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_seller_product(self, seller: User, product_id) -> ServiceResult[Product]:
        try:
            product = self._owned(seller).filter(id=product_id).first()
            if product is None:
                return service_err(ErrorCodes.NOT_FOUND, "Product not found")
            return service_ok(product)
        except Exception as e:
            self.logger.error(f"Error retrieving product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_public_product(self, product_id) -> ServiceResult[Product]:
        try:
            product = Product.objects.filter(id=product_id).first()
            if product is None:
                return service_err(ErrorCodes.NOT_FOUND, "Product not found")
            return service_ok(product)
        except Exception as e:
            self.logger.error(f"Error retrieving product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def create_product(self, seller: User, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Create a product owned by ``seller``.

        Args:
            seller: Authenticated seller
            data: Product fields (name, sku, price, category required)

        Returns:
            ServiceResult with created Product instance
        """
        missing = self._missing_fields(data)
        if missing:
            return service_err(
                ErrorCodes.INVALID_INPUT,
                "Missing required fields: name, sku, price, and category are required",
            )

        sku = str(data["sku"]).strip()
        if Product.objects.filter(sku=sku).exists():
            return service_err(ErrorCodes.CONFLICT, duplicate_sku_message(sku))

        try:
            with transaction.atomic():
                product = Product.objects.create(owner=seller, **data)
        except IntegrityError:
            return service_err(ErrorCodes.CONFLICT, duplicate_sku_message(sku))
        except Exception as e:
            self.logger.error(f"Error creating product for seller {seller.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        self.logger.info(f"Created product {product.id} ({product.sku}) for seller {seller.id}")
        return service_ok(product)

    @BaseService.log_performance
    def bulk_create_products(self, seller: User, items: List[Dict[str, Any]]) -> ServiceResult[List[Product]]:
        """
        Create several products at once. Either every product is created or none is.
        """
        if not items:
            return service_err(ErrorCodes.INVALID_INPUT, "No products given")

        for data in items:
            if self._missing_fields(data):
                return service_err(
                    ErrorCodes.INVALID_INPUT,
                    "Missing required fields: name, sku, price, and category are required",
                )

        skus = [str(data["sku"]).strip() for data in items]
        if len(set(skus)) != len(skus) or Product.objects.filter(sku__in=skus).exists():
            return service_err(ErrorCodes.CONFLICT, "One or more products have duplicate SKUs")

        try:
            with transaction.atomic():
                products = [Product.objects.create(owner=seller, **data) for data in items]
        except IntegrityError:
            return service_err(ErrorCodes.CONFLICT, "One or more products have duplicate SKUs")
        except Exception as e:
            self.logger.error(f"Error bulk creating products for seller {seller.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        self.logger.info(f"Bulk created {len(products)} products for seller {seller.id}")
        return service_ok(products)

    @BaseService.log_performance
    def update_product(self, seller: User, product_id, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Apply a partial update to one of the seller's products.

        The owner cannot be changed; derived review fields are never taken
        from input.
        """
        product = self._owned(seller).filter(id=product_id).first()
        if product is None:
            return service_err(ErrorCodes.NOT_FOUND, "Product not found")

        sku = str(data["sku"]).strip() if "sku" in data else None
        if sku is not None and Product.objects.filter(sku=sku).exclude(id=product.id).exists():
            return service_err(ErrorCodes.CONFLICT, duplicate_sku_message(sku))

        for field, value in data.items():
            setattr(product, field, value)

        try:
            with transaction.atomic():
                product.save()
        except IntegrityError:
            return service_err(ErrorCodes.CONFLICT, duplicate_sku_message(sku or product.sku))
        except Exception as e:
            self.logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        self.logger.info(f"Updated product {product.id}: fields={sorted(data)}")
        return service_ok(product)

    @BaseService.log_performance
    def update_price_discount(self, seller: User, product_id, price=None, discount=None) -> ServiceResult[Product]:
        """Set the price and/or discount of one of the seller's products."""
        data = {}
        if price is not None:
            data["price"] = price
        if discount is not None:
            data["discount"] = discount
        if not data:
            return service_err(ErrorCodes.INVALID_INPUT, "Price or discount is required")
        return self.update_product(seller, product_id, data)

    @BaseService.log_performance
    def delete_product(self, seller: User, product_id) -> ServiceResult[None]:
        try:
            _, per_model = self._owned(seller).filter(id=product_id).delete()
            if not per_model.get(Product._meta.label):
                return service_err(ErrorCodes.NOT_FOUND, "Product not found")
            self.logger.info(f"Deleted product {product_id} for seller {seller.id}")
            return service_ok(None)
        except Exception as e:
            self.logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_by_category(self, seller: User, category: str) -> ServiceResult[int]:
        """
        Delete every product the seller owns in ``category``.

        Returns:
            ServiceResult with the number of products deleted
        """
        category = normalize_category(category)
        if not category:
            return service_err(ErrorCodes.INVALID_INPUT, "Category is required")

        try:
            # delete() also counts cascaded reviews and cart lines
            _, per_model = self._owned(seller).filter(category=category).delete()
            deleted_count = per_model.get(Product._meta.label, 0)
            self.logger.info(f"Deleted {deleted_count} products in category '{category}' for seller {seller.id}")
            return service_ok(deleted_count)
        except Exception as e:
            self.logger.error(f"Error deleting category '{category}' for seller {seller.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def search_products(
        self,
        seller: User,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price=None,
        max_price=None,
    ) -> ServiceResult[List[Product]]:
        """Search the seller's products by name fragment, category and price range."""
        try:
            queryset = self._owned(seller)

            if name:
                queryset = queryset.filter(name__icontains=name)
            if category:
                queryset = queryset.filter(category=normalize_category(category))
            if min_price is not None:
                queryset = queryset.filter(price__gte=min_price)
            if max_price is not None:
                queryset = queryset.filter(price__lte=max_price)

            products = list(queryset.order_by("-created_at"))
            self.logger.info(f"Search for seller {seller.id} returned {len(products)} products")
            return service_ok(products)
        except Exception as e:
            self.logger.error(f"Error searching products for seller {seller.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def filter_products(self, filters: Dict[str, Any], owner: Optional[User] = None) -> ServiceResult[Dict[str, Any]]:
        """
        Filter, sort and paginate products.

        Args:
            filters: search, category, min_price, max_price, min_discount,
                max_discount, rating, sort_by, sort_order, page, limit
            owner: Restrict to this seller's products; None reads the whole catalog

        Returns:
            ServiceResult with ``page``, ``total_pages``, ``total_results`` and ``results``

        Example:
            >>> result = catalog_service.filter_products({"category": "audio", "page": 2})
            >>> if result.ok:
            ...     products = result.value["results"]
        """
        try:
            queryset = Product.objects.all() if owner is None else self._owned(owner)

            search = filters.get("search")
            if search:
                queryset = queryset.filter(Q(name__icontains=search) | Q(sku__icontains=search))

            if filters.get("category"):
                queryset = queryset.filter(category=normalize_category(filters["category"]))

            if filters.get("min_price") is not None:
                queryset = queryset.filter(price__gte=filters["min_price"])
            if filters.get("max_price") is not None:
                queryset = queryset.filter(price__lte=filters["max_price"])

            if filters.get("min_discount") is not None:
                queryset = queryset.filter(discount__gte=filters["min_discount"])
            if filters.get("max_discount") is not None:
                queryset = queryset.filter(discount__lte=filters["max_discount"])

            if filters.get("rating") is not None:
                queryset = queryset.filter(rating__gte=filters["rating"])

            sort_by = filters.get("sort_by")
            if sort_by:
                field = SORT_FIELDS[sort_by]
                ordering = f"-{field}" if filters.get("sort_order") == "desc" else field
            else:
                ordering = "-created_at"
            queryset = queryset.order_by(ordering, "id")

            page = filters.get("page") or 1
            limit = filters.get("limit") or DEFAULT_PAGE_SIZE
            paginator = Paginator(queryset, limit)
            total = paginator.count
            try:
                results = list(paginator.page(page).object_list)
            except EmptyPage:
                # Past the last page: empty list, totals still reported
                results = []

            self.logger.info(f"Filtered products: total={total}, page={page}, limit={limit}")

            return service_ok(
                {
                    "page": page,
                    "total_pages": paginator.num_pages if total else 0,
                    "total_results": total,
                    "results": results,
                }
            )
        except Exception as e:
            self.logger.error(f"Error filtering products: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
