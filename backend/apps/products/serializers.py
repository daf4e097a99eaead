from datetime import datetime
from decimal import Decimal

from rest_framework import serializers

from core.choices import SEX_CHOICES, COLOR_CHOICES, SIZE_CHOICES
from .models import Category, Discount, Product, ProductVariant, Image

# =============================================================================
# E-COMMERCE ARCHITECTURE: Catalog Serializers
# =============================================================================
# STATUS: Completo
# PURPOSE: DTOs del catálogo (lectura pública) y payloads de administración
# BUSINESS LOGIC:
# - El DTO de producto incluye final_price calculado al momento de la consulta
# - Las relaciones se escriben por ids (category_ids, discount_ids)
# =============================================================================

ORDER_BY_FIELDS = {
    'name': 'name',
    'sale_price': 'sale_price',
    'sex': 'sex',
    'has_promotion': 'has_promotion',
    'id': 'id',
}


#-----Categorías-----

class CategorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name']


class CategorySerializer(serializers.ModelSerializer):
    """Categoría con su padre y subcategorías activas"""
    parent = CategorySummarySerializer(read_only=True)
    subcategories = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ['id', 'name', 'is_active', 'parent', 'subcategories']

    def get_subcategories(self, obj):
        children = [child for child in obj.subcategories.all() if child.is_active]
        return CategorySummarySerializer(children, many=True).data


class CategoryWriteSerializer(serializers.ModelSerializer):
    parent = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.filter(is_active=True), allow_null=True, required=False,
        error_messages={'does_not_exist': 'La categoría padre {pk_value} no existe o está inactiva'}
    )

    class Meta:
        model = Category
        fields = ['id', 'name', 'parent']
        read_only_fields = ['id']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("El nombre de la categoría es obligatorio")
        return value.strip()

    def validate_parent(self, value):
        # Una categoría no puede ser su propio ancestro
        if value is not None and self.instance is not None:
            if value.pk == self.instance.pk or value.is_descendant_of(self.instance):
                raise serializers.ValidationError("Una categoría no puede ser su propio ancestro")
        return value


#-----Descuentos-----

class DiscountSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Discount
        fields = ['id', 'name', 'promotional_rate', 'date_from', 'date_to', 'time_from', 'time_to']


class DiscountSerializer(serializers.ModelSerializer):
    product_ids = serializers.PrimaryKeyRelatedField(
        source='products', many=True, required=False,
        queryset=Product.objects.filter(is_active=True)
    )

    class Meta:
        model = Discount
        fields = ['id', 'name', 'description', 'date_from', 'date_to', 'time_from', 'time_to',
                  'promotional_rate', 'product_ids', 'is_active']
        read_only_fields = ['id', 'is_active']
        extra_kwargs = {
            'promotional_rate': {'validators': []},
            'description': {'required': False},
        }

    def _merged(self, attrs, field):
        if field in attrs:
            return attrs[field]
        return getattr(self.instance, field, None)

    def validate(self, attrs):
        """Valida sobre los valores combinados (payload + instancia en updates parciales)"""
        errors = {}
        name = self._merged(attrs, 'name')
        rate = self._merged(attrs, 'promotional_rate')
        date_from = self._merged(attrs, 'date_from')
        date_to = self._merged(attrs, 'date_to')
        time_from = self._merged(attrs, 'time_from')
        time_to = self._merged(attrs, 'time_to')

        if not name or not str(name).strip():
            errors['name'] = 'El nombre del descuento es obligatorio'
        if rate is None or rate <= 0 or rate > 1:
            errors['promotional_rate'] = 'El porcentaje promocional debe ser mayor a 0 y como máximo 1'
        if date_from and date_to and date_from > date_to:
            errors['date_from'] = 'La fecha desde no puede ser posterior a la fecha hasta'
        if time_from and time_to and time_from >= time_to:
            errors['time_from'] = 'La hora desde debe ser anterior a la hora hasta'
        if not errors and date_from and date_to and time_from and time_to:
            if datetime.combine(date_from, time_from) >= datetime.combine(date_to, time_to):
                errors['date_from'] = 'El inicio del descuento debe ser anterior a su fin'

        if errors:
            raise serializers.ValidationError(errors)
        return attrs


#-----Imágenes-----

class ImageSerializer(serializers.ModelSerializer):
    product = serializers.PrimaryKeyRelatedField(
        queryset=Product.objects.filter(is_active=True), allow_null=True, required=False
    )

    class Meta:
        model = Image
        fields = ['id', 'name', 'product', 'is_active']
        read_only_fields = ['id', 'is_active']


class ImageSummarySerializer(serializers.ModelSerializer):
    url = serializers.CharField(source='name')

    class Meta:
        model = Image
        fields = ['id', 'url']


#-----Variantes-----

class ProductVariantSerializer(serializers.ModelSerializer):
    product = serializers.PrimaryKeyRelatedField(
        queryset=Product.objects.filter(is_active=True),
        error_messages={'does_not_exist': 'El producto {pk_value} no existe o está inactivo'}
    )

    class Meta:
        model = ProductVariant
        fields = ['id', 'product', 'purchase_price', 'current_stock', 'quantity', 'max_stock',
                  'color', 'size', 'is_active']
        read_only_fields = ['id', 'is_active']


class NestedVariantSerializer(serializers.ModelSerializer):
    """Variante dentro del DTO o del payload de producto"""

    class Meta:
        model = ProductVariant
        fields = ['id', 'purchase_price', 'current_stock', 'quantity', 'max_stock', 'color', 'size']
        read_only_fields = ['id']


class StockDecrementSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


#-----Productos-----

class ProductSerializer(serializers.ModelSerializer):
    """
    DTO de producto para el catálogo.

    final_price se calcula con los descuentos vigentes al instante
    `context['at']` (ahora si no se indica).
    """
    final_price = serializers.SerializerMethodField()
    categories = CategorySerializer(many=True, read_only=True)
    discounts = serializers.SerializerMethodField()
    images = serializers.SerializerMethodField()
    variants = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ['id', 'name', 'sale_price', 'final_price', 'sex', 'has_promotion',
                  'categories', 'discounts', 'images', 'variants', 'is_active', 'created_at']

    def get_final_price(self, obj):
        return str(obj.calculate_final_price(self.context.get('at')))

    def get_discounts(self, obj):
        discounts = [d for d in obj.discounts.all() if d.is_active]
        return DiscountSummarySerializer(discounts, many=True).data

    def get_images(self, obj):
        images = [image for image in obj.images.all() if image.is_active]
        return ImageSummarySerializer(images, many=True).data

    def get_variants(self, obj):
        variants = [variant for variant in obj.variants.all() if variant.is_active]
        return NestedVariantSerializer(variants, many=True).data


class ProductWriteSerializer(serializers.ModelSerializer):
    category_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    discount_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    images = serializers.ListField(child=serializers.CharField(max_length=500), required=False)
    variants = NestedVariantSerializer(many=True, required=False)

    class Meta:
        model = Product
        fields = ['id', 'name', 'sale_price', 'sex', 'has_promotion',
                  'category_ids', 'discount_ids', 'images', 'variants']
        read_only_fields = ['id']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("El nombre del producto es obligatorio")
        return value.strip()

    def validate_sale_price(self, value):
        if value < Decimal('0'):
            raise serializers.ValidationError("El precio de venta no puede ser negativo")
        return value


class ProductFilterSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True)
    categories = serializers.ListField(child=serializers.CharField(), required=False)
    sex = serializers.ChoiceField(choices=SEX_CHOICES, required=False)
    has_promotion = serializers.BooleanField(required=False, allow_null=True, default=None)
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    colors = serializers.ListField(child=serializers.CharField(), required=False)
    sizes = serializers.ListField(child=serializers.CharField(), required=False)
    min_stock = serializers.IntegerField(min_value=0, required=False)
    order_by = serializers.ChoiceField(choices=list(ORDER_BY_FIELDS), required=False)
    order_direction = serializers.ChoiceField(choices=['asc', 'desc'], default='asc')

    def validate_colors(self, value):
        # Valores desconocidos se ignoran
        valid = {code for code, _ in COLOR_CHOICES}
        return [color.upper() for color in value if color.upper() in valid]

    def validate_sizes(self, value):
        valid = {code for code, _ in SIZE_CHOICES}
        return [size.upper() for size in value if size.upper() in valid]

    def validate(self, attrs):
        min_price, max_price = attrs.get('min_price'), attrs.get('max_price')
        if min_price is not None and max_price is not None and min_price > max_price:
            raise serializers.ValidationError({'min_price': 'El precio mínimo no puede superar al máximo'})
        return attrs
