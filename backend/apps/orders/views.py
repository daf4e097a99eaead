from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.fields import DateField
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.users.permissions import IsAdminRole, is_admin
from core.pagination import AdminPagination, include_inactive, paginated_response
from .serializers import (
    PurchaseOrderSerializer,
    OrderLineSerializer,
    OrderCreateSerializer,
    OrderUpdateSerializer,
    AddLineSerializer,
    LineQuantitySerializer,
)
from . import services

# =============================================================================
# ÓRDENES DE COMPRA - requieren autenticación
# =============================================================================
# - Cliente: ve y crea solo sus órdenes
# - Admin: ve todas, edita/da de baja/reactiva

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def order_list_create(request):
    """
    GET: órdenes activas (admin: todas, cliente: propias). ?date=YYYY-MM-DD
    POST: crea la orden y reserva stock
    """
    if request.method == 'GET':
        date = None
        if request.query_params.get('date'):
            date = DateField().run_validation(request.query_params['date'])
        orders = services.list_orders(request.user, date=date)
        return paginated_response(request, orders, PurchaseOrderSerializer, 'orders', paginator_class=AdminPagination)

    serializer = OrderCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    order = services.create_order(
        request.user,
        serializer.validated_data['shipping_address'],
        [dict(line) for line in serializer.validated_data['lines']],
    )
    return Response({
        'message': 'Orden creada exitosamente',
        'order': PurchaseOrderSerializer(order).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def order_detail(request, pk):
    order = services.get_order(request.user, pk)

    if request.method == 'GET':
        return Response({'order': PurchaseOrderSerializer(order).data})

    if not is_admin(request.user):
        return Response({'error': 'Se requiere rol de administrador'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'DELETE':
        services.deactivate_order(order)
        return Response({'message': 'Orden desactivada exitosamente'})

    serializer = OrderUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    order = services.update_order(order, serializer.validated_data['shipping_address'])
    return Response({'message': 'Orden actualizada exitosamente', 'order': PurchaseOrderSerializer(order).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def order_reactivate(request, pk):
    order = services.reactivate_order(pk)
    return Response({'message': 'Orden reactivada exitosamente', 'order': PurchaseOrderSerializer(order).data})

# =============================================================================
# LÍNEAS DE ORDEN (ordenes-detalle)
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def line_list_create(request):
    """
    GET: todas las líneas (admin). ?include_inactive=true
    POST: agrega una línea a una orden propia (o cualquiera si es admin)
    """
    if request.method == 'GET':
        if not is_admin(request.user):
            return Response({'error': 'Se requiere rol de administrador'}, status=status.HTTP_403_FORBIDDEN)
        lines = services.line_queryset()
        if not include_inactive(request):
            lines = lines.filter(is_active=True)
        serializer = OrderLineSerializer(lines, many=True)
        return Response({'lines': serializer.data, 'total_count': len(serializer.data)})

    serializer = AddLineSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    line = services.add_line(request.user, **serializer.validated_data)
    return Response({
        'message': 'Detalle agregado exitosamente',
        'line': OrderLineSerializer(line).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lines_by_order(request, order_id):
    lines = services.list_lines_by_order(request.user, order_id)
    serializer = OrderLineSerializer(lines, many=True)
    return Response({'lines': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET'])
@permission_classes([IsAdminRole])
def lines_by_variant(request, variant_id):
    lines = services.line_queryset().filter(variant_id=variant_id, is_active=True)
    serializer = OrderLineSerializer(lines, many=True)
    return Response({'lines': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def line_detail(request, pk):
    if request.method == 'GET':
        line = services.get_line(request.user, pk)
        return Response({'line': OrderLineSerializer(line).data})

    if not is_admin(request.user):
        return Response({'error': 'Se requiere rol de administrador'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'DELETE':
        services.deactivate_line(pk)
        return Response({'message': 'Detalle desactivado exitosamente'})

    serializer = LineQuantitySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    line = services.update_line_quantity(pk, serializer.validated_data['quantity'])
    return Response({'message': 'Detalle actualizado exitosamente', 'line': OrderLineSerializer(line).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def line_reactivate(request, pk):
    line = services.reactivate_line(pk)
    return Response({'message': 'Detalle reactivado exitosamente', 'line': OrderLineSerializer(line).data})
