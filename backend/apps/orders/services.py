import logging
from collections import OrderedDict

from django.db import transaction
from django.db.models import Prefetch
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from apps.products.services import lock_variants, reserve_stock, release_stock
from apps.users.permissions import is_admin
from core.exceptions import BusinessRuleError, InsufficientStockError
from .models import PurchaseOrder, PurchaseOrderLine

logger = logging.getLogger(__name__)

# =============================================================================
# E-COMMERCE ARCHITECTURE: Order & Stock Consistency
# =============================================================================
# STATUS: Completo
# PURPOSE: Crear y mutar órdenes manteniendo current_stock consistente
# BUSINESS LOGIC:
# - Crear orden / agregar línea / reactivar: descuenta stock
# - Bajar línea u orden: devuelve stock de las líneas activas
# - Cambiar cantidad: aplica solo la diferencia
# - Todo ocurre con las variantes bloqueadas dentro de transaction.atomic;
#   si falta stock se lanza la excepción y no se escribe nada
# =============================================================================


def order_queryset():
    lines = PurchaseOrderLine.objects.select_related('variant__product')
    return PurchaseOrder.objects.select_related('user').prefetch_related(Prefetch('lines', queryset=lines))


def _check_access(user, order):
    if not is_admin(user) and order.user_id != user.pk:
        raise PermissionDenied('No autorizado para acceder a esta orden de compra.')


def get_order(user, pk):
    """Orden activa visible para el usuario (propietario o admin)"""
    order = order_queryset().filter(pk=pk, is_active=True).first()
    if order is None:
        raise NotFound('Orden de compra no encontrada.')
    _check_access(user, order)
    return order


def list_orders(user, date=None):
    orders = order_queryset().filter(is_active=True)
    if not is_admin(user):
        orders = orders.filter(user=user)
    if date is not None:
        # __date usa la zona horaria local (TIME_ZONE)
        orders = orders.filter(purchased_at__date=date)
    return orders


def _requested_by_variant(lines):
    requested = OrderedDict()
    for line in lines:
        requested[line['variant_id']] = requested.get(line['variant_id'], 0) + line['quantity']
    return requested


@transaction.atomic
def create_order(user, shipping_address, lines):
    """
    Crea la orden con sus líneas y reserva el stock.

    El stock se valida contra la cantidad total pedida por variante antes de
    escribir nada.
    """
    if not lines:
        raise BusinessRuleError('La orden debe tener al menos un producto.')

    requested = _requested_by_variant(lines)
    variants = lock_variants(requested.keys())

    for variant_id, quantity in requested.items():
        variant = variants.get(variant_id)
        if variant is None or not variant.is_active:
            raise NotFound(f'Variante con ID {variant_id} no encontrada o inactiva.')
        if variant.current_stock < quantity:
            logger.warning("Orden rechazada por stock: variante %s disponible %s, solicitado %s",
                           variant_id, variant.current_stock, quantity)
            raise InsufficientStockError(
                f'Stock insuficiente para la variante {variant_id}. '
                f'Stock actual: {variant.current_stock}, solicitado: {quantity}'
            )

    order = PurchaseOrder.objects.create(
        user=user,
        shipping_address=shipping_address,
        purchased_at=timezone.now(),
    )
    PurchaseOrderLine.objects.bulk_create([
        PurchaseOrderLine(
            order=order,
            variant=variants[line['variant_id']],
            quantity=line['quantity'],
            subtotal=variants[line['variant_id']].purchase_price * line['quantity'],
        )
        for line in lines
    ])
    for variant_id, quantity in requested.items():
        reserve_stock(variants[variant_id], quantity)

    order.recalculate_total()
    logger.info("Orden %s creada por usuario %s: %d líneas, total %s", order.pk, user.pk, len(lines), order.total)
    return order_queryset().get(pk=order.pk)


def update_order(order, shipping_address):
    order.shipping_address = shipping_address
    order.save(update_fields=['shipping_address'])
    return order


@transaction.atomic
def deactivate_order(order):
    """Baja lógica de la orden; devuelve el stock de sus líneas activas"""
    order = PurchaseOrder.objects.select_for_update().get(pk=order.pk)
    if not order.is_active:
        raise BusinessRuleError('La orden ya está desactivada.')

    lines = list(order.lines.filter(is_active=True))
    variants = lock_variants(line.variant_id for line in lines)
    for line in lines:
        release_stock(variants[line.variant_id], line.quantity)

    order.deactivate()
    logger.info("Orden %s desactivada, stock restaurado de %d líneas", order.pk, len(lines))
    return order


@transaction.atomic
def reactivate_order(pk):
    """Reactiva la orden volviendo a reservar el stock de sus líneas activas"""
    order = PurchaseOrder.objects.select_for_update().filter(pk=pk).first()
    if order is None:
        raise NotFound('Orden de compra no encontrada.')
    if order.is_active:
        raise BusinessRuleError('La orden ya está activa.')

    lines = list(order.lines.filter(is_active=True))
    requested = _requested_by_variant({'variant_id': line.variant_id, 'quantity': line.quantity} for line in lines)
    variants = lock_variants(requested.keys())
    for variant_id, quantity in requested.items():
        reserve_stock(variants[variant_id], quantity)

    order.reactivate()
    logger.info("Orden %s reactivada", order.pk)
    return order_queryset().get(pk=order.pk)


# -----Líneas de orden-----

def _active_order_for_update(order_id):
    order = PurchaseOrder.objects.select_for_update().filter(pk=order_id, is_active=True).first()
    if order is None:
        raise NotFound('Orden de compra no encontrada.')
    return order


def line_queryset():
    return PurchaseOrderLine.objects.select_related('order', 'variant__product')


def get_line(user, pk):
    line = line_queryset().filter(pk=pk, is_active=True, order__is_active=True).first()
    if line is None:
        raise NotFound('Detalle de orden no encontrado.')
    _check_access(user, line.order)
    return line


def list_lines_by_order(user, order_id):
    order = PurchaseOrder.objects.filter(pk=order_id, is_active=True).first()
    if order is None:
        raise NotFound('Orden de compra no encontrada.')
    _check_access(user, order)
    return line_queryset().filter(order=order, is_active=True)


@transaction.atomic
def add_line(user, order_id, variant_id, quantity):
    order = _active_order_for_update(order_id)
    # Un cliente solo puede agregar líneas a sus propias órdenes
    _check_access(user, order)

    variant = lock_variants([variant_id]).get(variant_id)
    if variant is None:
        raise NotFound('Detalle de producto no encontrado.')
    reserve_stock(variant, quantity)

    line = PurchaseOrderLine.objects.create(
        order=order,
        variant=variant,
        quantity=quantity,
        subtotal=variant.purchase_price * quantity,
    )
    order.recalculate_total()
    return line_queryset().get(pk=line.pk)


@transaction.atomic
def update_line_quantity(pk, quantity):
    """Cambia la cantidad aplicando solo la diferencia de stock y recalcula el subtotal"""
    line = PurchaseOrderLine.objects.select_for_update().filter(pk=pk, is_active=True).first()
    if line is None:
        raise NotFound('Detalle de orden no encontrado o no activo para actualizar.')
    order = _active_order_for_update(line.order_id)
    variant = lock_variants([line.variant_id])[line.variant_id]

    delta = quantity - line.quantity
    if delta > 0:
        reserve_stock(variant, delta)
    elif delta < 0:
        release_stock(variant, -delta)

    line.quantity = quantity
    line.subtotal = variant.purchase_price * quantity
    line.save(update_fields=['quantity', 'subtotal'])
    order.recalculate_total()
    return line_queryset().get(pk=line.pk)


@transaction.atomic
def deactivate_line(pk):
    line = PurchaseOrderLine.objects.select_for_update().filter(pk=pk).first()
    if line is None:
        raise NotFound('Detalle de orden no encontrado.')
    if not line.is_active:
        raise BusinessRuleError('El detalle de orden ya está desactivado.')
    order = _active_order_for_update(line.order_id)

    variant = lock_variants([line.variant_id])[line.variant_id]
    release_stock(variant, line.quantity)
    line.deactivate()
    order.recalculate_total()
    return line


@transaction.atomic
def reactivate_line(pk):
    line = PurchaseOrderLine.objects.select_for_update().filter(pk=pk).first()
    if line is None:
        raise NotFound('Detalle de orden no encontrado.')
    if line.is_active:
        raise BusinessRuleError('El detalle de orden ya está activo.')
    order = _active_order_for_update(line.order_id)

    variant = lock_variants([line.variant_id])[line.variant_id]
    reserve_stock(variant, line.quantity)
    line.reactivate()
    order.recalculate_total()
    return line_queryset().get(pk=line.pk)
