# backend/apps/orders/tests/conftest.py
import pytest

from apps.orders import services

@pytest.fixture
def order(user, variant, second_variant):
    """Orden con dos líneas: 2 x variant (60.00) + 1 x second_variant (25.50)"""
    return services.create_order(user, 'San Martín 1200, Godoy Cruz', [
        {'variant_id': variant.id, 'quantity': 2},
        {'variant_id': second_variant.id, 'quantity': 1},
    ])
