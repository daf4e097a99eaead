from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from apps.users.permissions import IsAdminRole
from core.pagination import StandardPagination, include_inactive, paginated_response
from .models import Category, Discount, Product, ProductVariant, Image
from .permissions import IsAdminOrReadOnly
from .serializers import (
    ProductSerializer,
    ProductWriteSerializer,
    ProductFilterSerializer,
    CategorySerializer,
    CategoryWriteSerializer,
    DiscountSerializer,
    ProductVariantSerializer,
    StockDecrementSerializer,
    ImageSerializer,
)
from . import services


class ProductPagination(StandardPagination):
    """Paginacion del catálogo"""
    page_size = 12


# =============================================================================
# PRODUCTOS - catálogo público, escritura admin
# =============================================================================
# - Los listados solo muestran productos activos
# - final_price se calcula en cada consulta según los descuentos vigentes
# - Optimizados con prefetch_related (categorías, descuentos, imágenes, variantes)

@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def product_list_create(request):
    """
    GET: lista paginada de productos activos
    POST: alta de producto con categorías, descuentos, imágenes y variantes (admin)
    """
    if request.method == 'GET':
        products = services.product_queryset().filter(is_active=True)
        return paginated_response(request, products, ProductSerializer, 'products', paginator_class=ProductPagination)

    serializer = ProductWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    product = services.create_product(dict(serializer.validated_data))
    return Response({
        'message': 'Producto creado exitosamente',
        'product': ProductSerializer(product).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def promotional_products(request):
    """Productos en promoción con precio final menor al de venta en este momento"""
    products = services.promotional_products()
    serializer = ProductSerializer(products, many=True)
    return Response({'products': serializer.data, 'total_count': len(products)})


@api_view(['POST'])
@permission_classes([permissions.AllowAny])
def filter_products(request):
    """Filtro + ordenamiento del catálogo (body JSON)"""
    filters = ProductFilterSerializer(data=request.data)
    filters.is_valid(raise_exception=True)
    products = services.filter_products(filters.validated_data)
    serializer = ProductSerializer(products, many=True)
    return Response({'products': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def available_categories(request):
    return Response({'categories': services.available_category_names()})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def available_colors(request):
    return Response({'colors': services.available_colors()})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def available_sizes(request):
    return Response({'sizes': services.available_sizes()})


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def product_detail(request, pk):
    product = services.get_active_product(pk)

    if request.method == 'GET':
        return Response({'product': ProductSerializer(product).data})

    if request.method == 'DELETE':
        product.deactivate()
        return Response({'message': 'Producto desactivado exitosamente'})

    serializer = ProductWriteSerializer(product, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    product = services.update_product(product, dict(serializer.validated_data))
    return Response({'message': 'Producto actualizado exitosamente', 'product': ProductSerializer(product).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def product_reactivate(request, pk):
    services.reactivate_entity(Product, pk, 'Producto')
    product = services.get_active_product(pk)
    return Response({'message': 'Producto reactivado exitosamente', 'product': ProductSerializer(product).data})

# =============================================================================
# CATEGORÍAS
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def category_list_create(request):
    if request.method == 'GET':
        categories = services.category_queryset()
        if not include_inactive(request):
            categories = categories.filter(is_active=True)
        serializer = CategorySerializer(categories, many=True)
        return Response({'categories': serializer.data, 'total_count': len(serializer.data)})

    serializer = CategoryWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    category = serializer.save()
    return Response({
        'message': 'Categoría creada exitosamente',
        'category': CategorySerializer(category).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def root_categories(request):
    categories = services.category_queryset().active().filter(parent__isnull=True)
    serializer = CategorySerializer(categories, many=True)
    return Response({'categories': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def subcategories(request, pk):
    parent = get_object_or_404(Category, pk=pk, is_active=True)
    categories = services.category_queryset().filter(is_active=True, parent=parent)
    serializer = CategorySerializer(categories, many=True)
    return Response({'categories': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def category_detail(request, pk):
    category = get_object_or_404(services.category_queryset(), pk=pk, is_active=True)

    if request.method == 'GET':
        return Response({'category': CategorySerializer(category).data})

    if request.method == 'DELETE':
        category.deactivate()
        return Response({'message': 'Categoría desactivada exitosamente'})

    serializer = CategoryWriteSerializer(category, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    category = serializer.save()
    return Response({'message': 'Categoría actualizada exitosamente', 'category': CategorySerializer(category).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def category_reactivate(request, pk):
    category = services.reactivate_entity(Category, pk, 'Categoría')
    return Response({'message': 'Categoría reactivada exitosamente', 'category': CategorySerializer(category).data})

# =============================================================================
# DESCUENTOS
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def discount_list_create(request):
    if request.method == 'GET':
        discounts = Discount.objects.active().prefetch_related('products')
        serializer = DiscountSerializer(discounts, many=True)
        return Response({'discounts': serializer.data, 'total_count': len(serializer.data)})

    serializer = DiscountSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    discount = services.save_discount(serializer)
    return Response({
        'message': 'Descuento creado exitosamente',
        'discount': DiscountSerializer(discount).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def discount_detail(request, pk):
    discount = get_object_or_404(Discount, pk=pk, is_active=True)

    if request.method == 'GET':
        return Response({'discount': DiscountSerializer(discount).data})

    if request.method == 'DELETE':
        discount.deactivate()
        return Response({'message': 'Descuento desactivado exitosamente'})

    serializer = DiscountSerializer(discount, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    discount = services.save_discount(serializer)
    return Response({'message': 'Descuento actualizado exitosamente', 'discount': DiscountSerializer(discount).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def discount_reactivate(request, pk):
    discount = services.reactivate_entity(Discount, pk, 'Descuento')
    return Response({'message': 'Descuento reactivado exitosamente', 'discount': DiscountSerializer(discount).data})

# =============================================================================
# VARIANTES (productos-detalle)
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def variant_list_create(request):
    """
    GET: variantes activas filtradas por ?product=&color=&size=&min_stock=
    POST: alta de variante (admin)
    """
    if request.method == 'GET':
        params = request.query_params
        try:
            product_id = int(params['product']) if params.get('product') else None
            min_stock = int(params['min_stock']) if params.get('min_stock') else None
        except ValueError:
            return Response({'error': 'Parámetros numéricos inválidos'}, status=status.HTTP_400_BAD_REQUEST)
        variants = services.filter_variants(product_id, params.get('color'), params.get('size'), min_stock)
        serializer = ProductVariantSerializer(variants, many=True)
        return Response({'variants': serializer.data, 'total_count': len(serializer.data)})

    serializer = ProductVariantSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    variant = serializer.save()
    return Response({
        'message': 'Variante creada exitosamente',
        'variant': ProductVariantSerializer(variant).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def variants_by_product(request, product_id):
    variants = ProductVariant.objects.filter(product_id=product_id, is_active=True)
    serializer = ProductVariantSerializer(variants, many=True)
    return Response({'variants': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def variant_lookup(request, product_id):
    """Variante activa por producto + talle + color (?size=&color=)"""
    size = request.query_params.get('size', '').upper()
    color = request.query_params.get('color', '').upper()
    if not size or not color:
        return Response({'error': "Debe indicar 'size' y 'color'"}, status=status.HTTP_400_BAD_REQUEST)
    variant = services.find_variant(product_id, size, color)
    return Response({'variant': ProductVariantSerializer(variant).data})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def variant_availability(request, product_id):
    size = request.query_params.get('size', '').upper()
    color = request.query_params.get('color', '').upper()
    return Response({'available': services.is_available(product_id, size, color)})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def product_available_sizes(request, product_id):
    return Response({'sizes': services.available_sizes(product_id)})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def product_available_colors(request, product_id):
    return Response({'colors': services.available_colors(product_id)})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def variants_with_stock(request, minimum):
    variants = services.variants_with_stock_greater_than(minimum)
    serializer = ProductVariantSerializer(variants, many=True)
    return Response({'variants': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def variant_detail(request, pk):
    variant = get_object_or_404(ProductVariant, pk=pk, is_active=True)

    if request.method == 'GET':
        return Response({'variant': ProductVariantSerializer(variant).data})

    if request.method == 'DELETE':
        variant.deactivate()
        return Response({'message': 'Variante desactivada exitosamente'})

    serializer = ProductVariantSerializer(variant, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    variant = serializer.save()
    return Response({'message': 'Variante actualizada exitosamente', 'variant': ProductVariantSerializer(variant).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def variant_reactivate(request, pk):
    variant = services.reactivate_entity(ProductVariant, pk, 'Variante')
    return Response({'message': 'Variante reactivada exitosamente', 'variant': ProductVariantSerializer(variant).data})


@api_view(['POST'])
@permission_classes([IsAdminRole])
def variant_decrement_stock(request, pk):
    serializer = StockDecrementSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    variant = services.decrement_stock(pk, serializer.validated_data['quantity'])
    return Response({'message': 'Stock actualizado', 'variant': ProductVariantSerializer(variant).data})

# =============================================================================
# IMÁGENES
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def image_list_create(request):
    if request.method == 'GET':
        images = Image.objects.all()
        if not include_inactive(request):
            images = images.active()
        serializer = ImageSerializer(images, many=True)
        return Response({'images': serializer.data, 'total_count': len(serializer.data)})

    serializer = ImageSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    image = serializer.save()
    return Response({'message': 'Imagen creada exitosamente', 'image': ImageSerializer(image).data},
                    status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def image_detail(request, pk):
    image = get_object_or_404(Image, pk=pk, is_active=True)

    if request.method == 'GET':
        return Response({'image': ImageSerializer(image).data})

    if request.method == 'DELETE':
        image.deactivate()
        return Response({'message': 'Imagen desactivada exitosamente'})

    serializer = ImageSerializer(image, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    image = serializer.save()
    return Response({'message': 'Imagen actualizada exitosamente', 'image': ImageSerializer(image).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def image_reactivate(request, pk):
    image = services.reactivate_entity(Image, pk, 'Imagen')
    return Response({'message': 'Imagen reactivada exitosamente', 'image': ImageSerializer(image).data})
