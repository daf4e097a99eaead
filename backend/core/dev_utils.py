# =============================================================================
# E-COMMERCE ARCHITECTURE: Development Utilities
# =============================================================================
# STATUS: Opcional - Utilidades para desarrollo
# PURPOSE: Datos de ejemplo para levantar el frontend contra una base vacía
# BUSINESS LOGIC: Idempotente (get_or_create), se puede correr varias veces
# NEXT STEPS: Usar desde el comando `python manage.py seed_demo`
# =============================================================================

from datetime import date, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model

from core.choices import ROLE_ADMIN, ROLE_CUSTOMER

User = get_user_model()

def create_demo_users():
    """
    Crear un admin y un cliente de prueba
    """
    admin, created = User.objects.get_or_create(
        email='admin@ecommerce.com',
        defaults={
            'username': 'admin@ecommerce.com',
            'first_name': 'Admin',
            'last_name': 'User',
            'role': ROLE_ADMIN,
            'is_superuser': True,
            'is_staff': True,
        }
    )
    if created:
        admin.set_password('admin123')
        admin.save()

    customer, created = User.objects.get_or_create(
        email='cliente@ecommerce.com',
        defaults={
            'username': 'cliente@ecommerce.com',
            'first_name': 'Cliente',
            'last_name': 'Demo',
            'role': ROLE_CUSTOMER,
        }
    )
    if created:
        customer.set_password('cliente123')
        customer.save()

    return admin, customer

def create_demo_locations():
    """Provincias y localidades de prueba"""
    from apps.locations.models import Province, Locality

    data = {
        'Buenos Aires': ['La Plata', 'Mar del Plata'],
        'Mendoza': ['Godoy Cruz', 'Luján de Cuyo'],
        'Córdoba': ['Villa Carlos Paz'],
    }

    localities = []
    for province_name, locality_names in data.items():
        province, _ = Province.objects.get_or_create(name=province_name)
        for name in locality_names:
            locality, _ = Locality.objects.get_or_create(name=name, province=province)
            localities.append(locality)

    return localities

def create_demo_categories():
    """Árbol de categorías de prueba"""
    from apps.products.models import Category

    tree = {
        'Indumentaria': ['Remeras', 'Pantalones'],
        'Calzado': ['Zapatillas'],
    }

    categories = []
    for parent_name, children in tree.items():
        parent, _ = Category.objects.get_or_create(name=parent_name, parent=None)
        categories.append(parent)
        for child_name in children:
            child, _ = Category.objects.get_or_create(name=child_name, parent=parent)
            categories.append(child)

    return categories

def create_demo_catalog():
    """Productos con variantes y un descuento vigente todo el día"""
    from apps.products.models import Category, Discount, Product, ProductVariant

    categories = {category.name: category for category in create_demo_categories()}

    discount, _ = Discount.objects.get_or_create(
        name='Promo de temporada',
        defaults={
            'description': '20% off en productos seleccionados',
            'date_from': date.today(),
            'date_to': date.today() + timedelta(days=30),
            'time_from': time(0, 0),
            'time_to': time(23, 59, 59),
            'promotional_rate': Decimal('0.20'),
        }
    )

    products_data = [
        {'name': 'Remera básica', 'sale_price': Decimal('15000.00'), 'sex': 'UNISEX',
         'has_promotion': True, 'category': 'Remeras',
         'variants': [('NEGRO', 'M', 20), ('BLANCO', 'L', 15)]},
        {'name': 'Jean recto', 'sale_price': Decimal('42000.00'), 'sex': 'FEMENINO',
         'has_promotion': False, 'category': 'Pantalones',
         'variants': [('AZUL', 'TALLE_38', 8), ('CELESTE', 'TALLE_40', 5)]},
        {'name': 'Zapatilla urbana', 'sale_price': Decimal('89000.00'), 'sex': 'MASCULINO',
         'has_promotion': True, 'category': 'Zapatillas',
         'variants': [('BLANCO', 'TALLE_42', 10), ('GRIS', 'TALLE_43', 6)]},
    ]

    products = []
    for data in products_data:
        product, created = Product.objects.get_or_create(
            name=data['name'],
            defaults={
                'sale_price': data['sale_price'],
                'sex': data['sex'],
                'has_promotion': data['has_promotion'],
            }
        )
        if created:
            product.categories.add(categories[data['category']])
            if product.has_promotion:
                product.discounts.add(discount)
            for color, size, stock in data['variants']:
                ProductVariant.objects.create(
                    product=product,
                    purchase_price=(data['sale_price'] * Decimal('0.6')).quantize(Decimal('0.01')),
                    current_stock=stock,
                    quantity=stock,
                    max_stock=stock * 2,
                    color=color,
                    size=size,
                )
        products.append(product)

    return products
