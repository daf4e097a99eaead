import logging

from django.db import transaction
from django.db.models import F, Prefetch
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework.exceptions import NotFound

from core.exceptions import InsufficientStockError
from .models import Category, Discount, Product, ProductVariant, Image
from .serializers import ORDER_BY_FIELDS

logger = logging.getLogger(__name__)

# =============================================================================
# E-COMMERCE ARCHITECTURE: Catalog Services
# =============================================================================
# STATUS: Completo
# PURPOSE: Alta/edición de productos con relaciones, filtros del catálogo y stock
# BUSINESS LOGIC:
# - Los ids de categorías/descuentos reemplazan el conjunto completo al editar
# - El stock se modifica con filas bloqueadas (select_for_update) + F()
# =============================================================================


def product_queryset():
    return Product.objects.prefetch_related(
        Prefetch('categories', queryset=Category.objects.select_related('parent').prefetch_related('subcategories')),
        'discounts',
        'images',
        'variants',
    )


def get_active_product(pk):
    return get_object_or_404(product_queryset(), pk=pk, is_active=True)


def _resolve_ids(model, ids, label):
    ids = list(dict.fromkeys(ids))
    found = list(model.objects.filter(pk__in=ids, is_active=True))
    missing = set(ids) - {obj.pk for obj in found}
    if missing:
        raise NotFound(f'{label} no encontrada(s) o inactiva(s): {sorted(missing)}')
    return found


# -----Productos-----

@transaction.atomic
def create_product(data):
    category_ids = data.pop('category_ids', [])
    discount_ids = data.pop('discount_ids', [])
    image_urls = data.pop('images', [])
    variants = data.pop('variants', [])

    categories = _resolve_ids(Category, category_ids, 'Categoría(s)')
    discounts = _resolve_ids(Discount, discount_ids, 'Descuento(s)')

    product = Product.objects.create(**data)
    product.categories.set(categories)
    product.discounts.set(discounts)
    Image.objects.bulk_create([Image(name=url, product=product) for url in image_urls])
    ProductVariant.objects.bulk_create([ProductVariant(product=product, **variant) for variant in variants])

    logger.info("Producto %s creado con %d variantes", product.pk, len(variants))
    return get_active_product(product.pk)


@transaction.atomic
def update_product(product, data):
    category_ids = data.pop('category_ids', None)
    discount_ids = data.pop('discount_ids', None)
    image_urls = data.pop('images', None)
    variants = data.pop('variants', None)

    for field, value in data.items():
        setattr(product, field, value)
    product.save()

    if category_ids is not None:
        product.categories.set(_resolve_ids(Category, category_ids, 'Categoría(s)'))
    if discount_ids is not None:
        product.discounts.set(_resolve_ids(Discount, discount_ids, 'Descuento(s)'))
    # Imágenes y variantes nuevas se agregan; las existentes se gestionan por sus endpoints
    if image_urls:
        Image.objects.bulk_create([Image(name=url, product=product) for url in image_urls])
    if variants:
        ProductVariant.objects.bulk_create([ProductVariant(product=product, **variant) for variant in variants])

    logger.info("Producto %s actualizado", product.pk)
    return get_active_product(product.pk)


def promotional_products(at=None):
    """Productos con promoción cuyo precio final ahora es menor al de venta"""
    at = at or timezone.now()
    products = product_queryset().filter(is_active=True, has_promotion=True)
    return [product for product in products if product.calculate_final_price(at) < product.sale_price]


def available_category_names():
    return sorted(set(
        Category.objects.filter(is_active=True, products__is_active=True).values_list('name', flat=True)
    ))


def available_colors(product_id=None):
    variants = ProductVariant.objects.filter(is_active=True, product__is_active=True)
    if product_id is not None:
        variants = variants.filter(product_id=product_id)
    return sorted(set(variants.values_list('color', flat=True)))


def available_sizes(product_id=None):
    variants = ProductVariant.objects.filter(is_active=True, product__is_active=True)
    if product_id is not None:
        variants = variants.filter(product_id=product_id)
    return sorted(set(variants.values_list('size', flat=True)))


def filter_products(filters):
    """
    Filtra y ordena productos activos.

    Los filtros de color, talle y stock mínimo se aplican sobre una misma
    variante activa (todas las condiciones en una sola variante).
    """
    products = product_queryset().filter(is_active=True)

    if filters.get('name'):
        products = products.filter(name__icontains=filters['name'])
    if filters.get('sex'):
        products = products.filter(sex=filters['sex'])
    if filters.get('has_promotion') is not None:
        products = products.filter(has_promotion=filters['has_promotion'])
    if filters.get('min_price') is not None:
        products = products.filter(sale_price__gte=filters['min_price'])
    if filters.get('max_price') is not None:
        products = products.filter(sale_price__lte=filters['max_price'])
    if filters.get('categories'):
        products = products.filter(categories__name__in=filters['categories'], categories__is_active=True)

    variant_filter = {}
    if filters.get('colors'):
        variant_filter['variants__color__in'] = filters['colors']
    if filters.get('sizes'):
        variant_filter['variants__size__in'] = filters['sizes']
    if filters.get('min_stock') is not None:
        variant_filter['variants__current_stock__gte'] = filters['min_stock']
    if variant_filter:
        products = products.filter(variants__is_active=True, **variant_filter)

    products = products.distinct()

    order_by = filters.get('order_by')
    if order_by:
        field = ORDER_BY_FIELDS[order_by]
        prefix = '-' if filters.get('order_direction') == 'desc' else ''
        products = products.order_by(f'{prefix}{field}', 'id')

    return products


# -----Categorías-----

def category_queryset():
    return Category.objects.select_related('parent').prefetch_related('subcategories')


def reactivate_entity(model, pk, label):
    """Reactiva un registro dado de baja (404 si no existe)"""
    obj = get_object_or_404(model, pk=pk)
    if not obj.is_active:
        obj.reactivate()
        logger.info("%s %s reactivado", label, pk)
    return obj


# -----Descuentos-----

@transaction.atomic
def save_discount(serializer):
    products = serializer.validated_data.pop('products', None)
    discount = serializer.save()
    if products is not None:
        discount.products.set(products)
    logger.info("Descuento %s guardado (%s)", discount.pk, discount.name)
    return discount


# -----Variantes-----

def find_variant(product_id, size, color):
    variant = ProductVariant.objects.filter(
        product_id=product_id, size=size, color=color, is_active=True
    ).first()
    if variant is None:
        raise NotFound('No existe una variante activa con ese talle y color.')
    return variant


def variants_with_stock_greater_than(minimum):
    return ProductVariant.objects.filter(is_active=True, current_stock__gt=minimum)


def filter_variants(product_id=None, color=None, size=None, min_stock=None):
    variants = ProductVariant.objects.filter(is_active=True)
    if product_id is not None:
        variants = variants.filter(product_id=product_id)
    if color:
        variants = variants.filter(color=color.upper())
    if size:
        variants = variants.filter(size=size.upper())
    if min_stock is not None:
        variants = variants.filter(current_stock__gte=min_stock)
    return variants


def is_available(product_id, size, color):
    return ProductVariant.objects.filter(
        product_id=product_id, size=size, color=color, is_active=True, current_stock__gt=0
    ).exists()


def lock_variants(variant_ids):
    """Bloquea las variantes indicadas hasta el fin de la transacción"""
    return {
        variant.pk: variant
        for variant in ProductVariant.objects.select_for_update().filter(pk__in=set(variant_ids))
    }


def reserve_stock(variant, quantity):
    """Descuenta stock de una variante ya bloqueada"""
    if not variant.is_active:
        raise NotFound(f'Variante {variant.pk} no encontrada o inactiva.')
    if variant.current_stock < quantity:
        logger.warning("Stock insuficiente para variante %s: disponible %s, requerido %s",
                       variant.pk, variant.current_stock, quantity)
        raise InsufficientStockError(
            f'Stock insuficiente para la variante {variant.pk}. '
            f'Disponible: {variant.current_stock}, Requerido: {quantity}'
        )
    ProductVariant.objects.filter(pk=variant.pk).update(current_stock=F('current_stock') - quantity)
    variant.current_stock -= quantity
    logger.info("Stock de variante %s decrementado en %s", variant.pk, quantity)


def release_stock(variant, quantity):
    """Devuelve stock a una variante ya bloqueada"""
    ProductVariant.objects.filter(pk=variant.pk).update(current_stock=F('current_stock') + quantity)
    variant.current_stock += quantity
    logger.info("Stock de variante %s restaurado en %s", variant.pk, quantity)


@transaction.atomic
def decrement_stock(variant_id, quantity):
    variant = lock_variants([variant_id]).get(variant_id)
    if variant is None:
        raise NotFound(f'Variante {variant_id} no encontrada.')
    reserve_stock(variant, quantity)
    return variant
