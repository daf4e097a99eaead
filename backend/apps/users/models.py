import uuid

from django.db import models
from django.contrib.auth.models import AbstractUser
from django.utils import timezone

from core.choices import ROLE_CHOICES, ROLE_ADMIN, ROLE_CUSTOMER, SEX_CHOICES

# =============================================================================
# E-COMMERCE ARCHITECTURE: User Accounts
# =============================================================================
# STATUS: Completo
# PURPOSE: Cuentas de clientes y administradores con login por email
# BUSINESS LOGIC:
# - Customers: Compran productos y gestionan sus direcciones
# - Admins: Gestionan catálogo, ubicaciones, órdenes y usuarios
# - Baja lógica: al desactivar se liberan email y username (placeholders únicos)
# NEXT STEPS: Vincular cuentas externas mediante auth0_id
# =============================================================================

DEACTIVATED_EMAIL_DOMAIN = 'ecommerce.com'


class User(AbstractUser):
    ROLE_CHOICES = ROLE_CHOICES

    # Campos principales
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)
    dni = models.PositiveIntegerField(null=True, blank=True)
    sex = models.CharField(max_length=20, choices=SEX_CHOICES, null=True, blank=True)
    birth_date = models.DateField(null=True, blank=True)
    phone = models.CharField(max_length=30, blank=True)

    # Identificador de proveedor externo
    auth0_id = models.CharField(max_length=255, unique=True, null=True, blank=True)

    profile_image = models.OneToOneField(
        'products.Image',
        related_name='profile_owner',
        on_delete=models.SET_NULL,
        null=True, blank=True
    )

    # Timestamps
    deactivated_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Configuración de autenticación
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f'{self.email} ({self.get_role_display()})'

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN or self.is_superuser

    @property
    def is_customer(self):
        return self.role == ROLE_CUSTOMER

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def deactivate(self):
        """Baja lógica: reemplaza email/username por placeholders para liberar los valores únicos"""
        placeholder = f'deactivated_{uuid.uuid4().hex}'
        self.email = f'{placeholder}@{DEACTIVATED_EMAIL_DOMAIN}'
        self.username = placeholder
        self.is_active = False
        self.deactivated_at = timezone.now()
        self.save(update_fields=['email', 'username', 'is_active', 'deactivated_at', 'updated_at'])

    def reactivate(self, email, username):
        self.email = email
        self.username = username
        self.is_active = True
        self.deactivated_at = None
        self.save(update_fields=['email', 'username', 'is_active', 'deactivated_at', 'updated_at'])
