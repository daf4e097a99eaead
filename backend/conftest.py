# backend/conftest.py
from datetime import time, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from apps.locations.models import Province, Locality
from apps.products.models import Category, Discount, Product, ProductVariant
from apps.users.tokens import tokens_for_user

User = get_user_model()


def bearer_client(user):
    """APIClient con el access token del usuario"""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens_for_user(user)['token']}")
    return client


@pytest.fixture
def api_client():
    """Cliente API para las pruebas"""
    return APIClient()

@pytest.fixture
def user_data():
    """Datos de prueba para crear usuario"""
    return {
        'email': 'test@example.com',
        'username': 'test@example.com',
        'password': 'testpass123',
        'first_name': 'Test',
        'last_name': 'User',
        'phone': '1234567890',
    }

@pytest.fixture
def admin_data():
    """Datos de prueba para crear admin"""
    return {
        'email': 'admin@example.com',
        'username': 'admin@example.com',
        'password': 'adminpass123',
        'first_name': 'Admin',
        'last_name': 'User',
        'role': 'admin',
    }

@pytest.fixture
def user(db, user_data):
    """Usuario cliente de prueba"""
    return User.objects.create_user(**user_data)

@pytest.fixture
def other_user(db):
    """Otro cliente, para probar accesos ajenos"""
    return User.objects.create_user(
        email='other@example.com',
        username='other@example.com',
        password='otherpass123',
        first_name='Other',
        last_name='User',
    )

@pytest.fixture
def admin_user(db, admin_data):
    """Usuario admin de prueba"""
    return User.objects.create_user(**admin_data)

@pytest.fixture
def authenticated_client(user):
    """Cliente API autenticado como cliente"""
    return bearer_client(user)

@pytest.fixture
def other_client(other_user):
    return bearer_client(other_user)

@pytest.fixture
def admin_client(admin_user):
    """Cliente API autenticado como admin"""
    return bearer_client(admin_user)

# =============================================================================
# FIXTURES DE UBICACIONES Y CATÁLOGO
# =============================================================================

@pytest.fixture
def province(db):
    return Province.objects.create(name='Mendoza')

@pytest.fixture
def locality(db, province):
    return Locality.objects.create(name='Godoy Cruz', province=province)

@pytest.fixture
def category(db):
    return Category.objects.create(name='Remeras')

@pytest.fixture
def product(db, category):
    product = Product.objects.create(
        name='Remera básica',
        sale_price=Decimal('100.00'),
        sex='UNISEX',
        has_promotion=False,
    )
    product.categories.add(category)
    return product

@pytest.fixture
def variant(db, product):
    return ProductVariant.objects.create(
        product=product,
        purchase_price=Decimal('60.00'),
        current_stock=10,
        quantity=10,
        max_stock=20,
        color='NEGRO',
        size='M',
    )

@pytest.fixture
def second_variant(db, product):
    return ProductVariant.objects.create(
        product=product,
        purchase_price=Decimal('25.50'),
        current_stock=3,
        quantity=3,
        max_stock=10,
        color='BLANCO',
        size='L',
    )

@pytest.fixture
def current_discount(db):
    """Descuento del 20% vigente durante todo el día de hoy"""
    today = timezone.localdate()
    return Discount.objects.create(
        name='Promo del día',
        description='20% off',
        date_from=today - timedelta(days=1),
        date_to=today + timedelta(days=1),
        time_from=time(0, 0),
        time_to=time(23, 59, 59, 999999),
        promotional_rate=Decimal('0.20'),
    )
