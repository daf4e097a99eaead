from decimal import Decimal, ROUND_HALF_UP

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone

from core.choices import SEX_CHOICES, COLOR_CHOICES, SIZE_CHOICES
from core.models import SoftDeleteModel

# =============================================================================
# E-COMMERCE ARCHITECTURE: Product Catalog
# =============================================================================
# STATUS: Completo
# PURPOSE: Catálogo de productos con variantes (color/talle/stock)
# BUSINESS LOGIC:
# - Categories: árbol padre/hijo (lista de adyacencia)
# - Discounts: ventana de fecha + hora con un porcentaje promocional
# - Products: precio de venta, el precio final depende de los descuentos vigentes
# - Variants: stock por color y talle, se descuenta al comprar
# - Images: URL de imagen, opcionalmente asociada a un producto
# =============================================================================

TWO_PLACES = Decimal('0.01')


#-----Category Model-----
class Category(SoftDeleteModel):
    name = models.CharField(max_length=255)
    parent = models.ForeignKey(
        'self',
        related_name='subcategories',
        on_delete=models.PROTECT,
        null=True, blank=True,
        help_text="Categoría padre (null para categorías raíz)"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Category"
        verbose_name_plural = "Categories"
        ordering = ['name']

    def __str__(self):
        return self.name

    def is_descendant_of(self, other):
        """True si `other` aparece en la cadena de padres de esta categoría"""
        node = self.parent
        while node is not None:
            if node.pk == other.pk:
                return True
            node = node.parent
        return False


#-----Discount Model-----
class Discount(SoftDeleteModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    date_from = models.DateField()
    date_to = models.DateField()
    time_from = models.TimeField()
    time_to = models.TimeField()
    # Fracción a descontar: 0.20 = 20% off
    promotional_rate = models.DecimalField(
        max_digits=5, decimal_places=4,
        validators=[MinValueValidator(Decimal('0.0001')), MaxValueValidator(Decimal('1'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Discount"
        verbose_name_plural = "Discounts"
        ordering = ['-date_from', 'name']

    def __str__(self):
        return f"{self.name} ({self.promotional_rate * 100:.0f}%)"

    def applies_at(self, moment=None):
        """La fecha y la hora locales de `moment` caen dentro de la ventana (ambos extremos incluidos)"""
        local = timezone.localtime(moment or timezone.now())
        current_date = local.date()
        current_time = local.time().replace(microsecond=0)
        return (self.date_from <= current_date <= self.date_to and
                self.time_from <= current_time <= self.time_to)

    def apply_to(self, price):
        discounted = Decimal(str(price)) * (Decimal('1') - Decimal(str(self.promotional_rate)))
        return discounted.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


#-----Product Model-----
class Product(SoftDeleteModel):
    name = models.CharField(max_length=255)
    sale_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    sex = models.CharField(max_length=20, choices=SEX_CHOICES)
    has_promotion = models.BooleanField(default=False)

    categories = models.ManyToManyField(Category, related_name='products', blank=True)
    discounts = models.ManyToManyField(Discount, related_name='products', blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Product"
        verbose_name_plural = "Products"
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['is_active', 'has_promotion'], name='product_active_promo_idx'),
        ]

    def __str__(self):
        return self.name

    def active_discounts_at(self, moment=None):
        # Usa .all() para aprovechar prefetch_related('discounts')
        return [d for d in self.discounts.all() if d.is_active and d.applies_at(moment)]

    def calculate_final_price(self, at=None):
        """
        Precio final del producto en el instante `at` (por defecto ahora).

        Sin promoción o sin descuentos vigentes devuelve sale_price; si hay
        varios descuentos vigentes gana el precio más bajo.
        """
        price = Decimal(str(self.sale_price)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        if not self.has_promotion:
            return price

        candidates = [discount.apply_to(self.sale_price) for discount in self.active_discounts_at(at)]
        if not candidates:
            return price
        return min(candidates)


#-----Product Variant Model-----
class ProductVariant(SoftDeleteModel):
    product = models.ForeignKey(Product, related_name='variants', on_delete=models.PROTECT)
    purchase_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    current_stock = models.PositiveIntegerField(default=0)
    quantity = models.PositiveIntegerField(default=0)
    max_stock = models.PositiveIntegerField(default=0)
    color = models.CharField(max_length=20, choices=COLOR_CHOICES)
    size = models.CharField(max_length=20, choices=SIZE_CHOICES)

    class Meta:
        verbose_name = "Product Variant"
        verbose_name_plural = "Product Variants"
        ordering = ['id']
        indexes = [
            models.Index(fields=['product', 'size', 'color'], name='variant_lookup_idx'),
        ]

    def __str__(self):
        return f"{self.product.name} - {self.color} / {self.size}"


#-----Image Model-----
class Image(SoftDeleteModel):
    # URL (o ruta bajo /uploads/) de la imagen
    name = models.CharField(max_length=500)
    product = models.ForeignKey(
        Product,
        related_name='images',
        on_delete=models.SET_NULL,
        null=True, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Image"
        verbose_name_plural = "Images"
        ordering = ['created_at']

    def __str__(self):
        return self.name
