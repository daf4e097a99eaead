# =============================================================================
# E-COMMERCE ARCHITECTURE: Shared Choices
# =============================================================================
# PURPOSE: Enumeraciones compartidas por usuarios, productos y variantes
# BUSINESS LOGIC: Los valores se guardan en mayúsculas tal cual los usa el frontend
# =============================================================================

SEX_CHOICES = [
    ('FEMENINO', 'Femenino'),
    ('MASCULINO', 'Masculino'),
    ('UNISEX_CHILD', 'Unisex niño'),
    ('UNISEX', 'Unisex'),
    ('OTRO', 'Otro'),
]

COLOR_CHOICES = [
    ('AZUL', 'Azul'),
    ('BLANCO', 'Blanco'),
    ('CELESTE', 'Celeste'),
    ('NEGRO', 'Negro'),
    ('VERDE', 'Verde'),
    ('MULTICOLOR', 'Multicolor'),
    ('ROJO', 'Rojo'),
    ('ROSA', 'Rosa'),
    ('MARRON', 'Marrón'),
    ('AMARILLO', 'Amarillo'),
    ('VIOLETA', 'Violeta'),
    ('GRIS', 'Gris'),
]

# Talles de ropa + talles numéricos de calzado (25 a 52)
SIZE_CHOICES = [
    ('XS', 'XS'),
    ('S', 'S'),
    ('M', 'M'),
    ('L', 'L'),
    ('XL', 'XL'),
    ('XXL', 'XXL'),
] + [(f'TALLE_{n}', str(n)) for n in range(25, 53)]

ROLE_ADMIN = 'admin'
ROLE_CUSTOMER = 'customer'

ROLE_CHOICES = [
    (ROLE_ADMIN, 'Admin'),
    (ROLE_CUSTOMER, 'Customer'),
]
