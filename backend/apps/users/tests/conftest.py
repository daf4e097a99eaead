# backend/apps/users/tests/conftest.py
import pytest
from django.contrib.auth import get_user_model

User = get_user_model()

@pytest.fixture
def registration_data():
    """Payload de registro"""
    return {
        'email': 'nuevo@example.com',
        'password': 'secreto123',
        'first_name': 'Nuevo',
        'last_name': 'Cliente',
        'dni': 30123456,
        'sex': 'FEMENINO',
        'birth_date': '1990-05-17',
        'phone': '2615551234',
    }

@pytest.fixture
def deactivated_user(db):
    """Usuario dado de baja (email/username reemplazados por placeholders)"""
    user = User.objects.create_user(
        email='baja@example.com',
        username='baja@example.com',
        password='bajapass123',
        first_name='Baja',
        last_name='User',
    )
    user.deactivate()
    return user
