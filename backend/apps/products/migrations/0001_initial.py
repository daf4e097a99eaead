# Generated manually for the initial catalog schema

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(default=True)),
                ('name', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, help_text='Categoría padre (null para categorías raíz)', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='subcategories', to='products.category')),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Discount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(default=True)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('date_from', models.DateField()),
                ('date_to', models.DateField()),
                ('time_from', models.TimeField()),
                ('time_to', models.TimeField()),
                ('promotional_rate', models.DecimalField(decimal_places=4, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0.0001')), django.core.validators.MaxValueValidator(Decimal('1'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Discount',
                'verbose_name_plural': 'Discounts',
                'ordering': ['-date_from', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(default=True)),
                ('name', models.CharField(max_length=255)),
                ('sale_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('sex', models.CharField(choices=[('FEMENINO', 'Femenino'), ('MASCULINO', 'Masculino'), ('UNISEX_CHILD', 'Unisex niño'), ('UNISEX', 'Unisex'), ('OTRO', 'Otro')], max_length=20)),
                ('has_promotion', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('categories', models.ManyToManyField(blank=True, related_name='products', to='products.category')),
                ('discounts', models.ManyToManyField(blank=True, related_name='products', to='products.discount')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['is_active', 'has_promotion'], name='product_active_promo_idx')],
            },
        ),
        migrations.CreateModel(
            name='ProductVariant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(default=True)),
                ('purchase_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('current_stock', models.PositiveIntegerField(default=0)),
                ('quantity', models.PositiveIntegerField(default=0)),
                ('max_stock', models.PositiveIntegerField(default=0)),
                ('color', models.CharField(choices=[('AZUL', 'Azul'), ('BLANCO', 'Blanco'), ('CELESTE', 'Celeste'), ('NEGRO', 'Negro'), ('VERDE', 'Verde'), ('MULTICOLOR', 'Multicolor'), ('ROJO', 'Rojo'), ('ROSA', 'Rosa'), ('MARRON', 'Marrón'), ('AMARILLO', 'Amarillo'), ('VIOLETA', 'Violeta'), ('GRIS', 'Gris')], max_length=20)),
                ('size', models.CharField(choices=[('XS', 'XS'), ('S', 'S'), ('M', 'M'), ('L', 'L'), ('XL', 'XL'), ('XXL', 'XXL'), ('TALLE_25', '25'), ('TALLE_26', '26'), ('TALLE_27', '27'), ('TALLE_28', '28'), ('TALLE_29', '29'), ('TALLE_30', '30'), ('TALLE_31', '31'), ('TALLE_32', '32'), ('TALLE_33', '33'), ('TALLE_34', '34'), ('TALLE_35', '35'), ('TALLE_36', '36'), ('TALLE_37', '37'), ('TALLE_38', '38'), ('TALLE_39', '39'), ('TALLE_40', '40'), ('TALLE_41', '41'), ('TALLE_42', '42'), ('TALLE_43', '43'), ('TALLE_44', '44'), ('TALLE_45', '45'), ('TALLE_46', '46'), ('TALLE_47', '47'), ('TALLE_48', '48'), ('TALLE_49', '49'), ('TALLE_50', '50'), ('TALLE_51', '51'), ('TALLE_52', '52')], max_length=20)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='variants', to='products.product')),
            ],
            options={
                'verbose_name': 'Product Variant',
                'verbose_name_plural': 'Product Variants',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['product', 'size', 'color'], name='variant_lookup_idx')],
            },
        ),
        migrations.CreateModel(
            name='Image',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(default=True)),
                ('name', models.CharField(max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='images', to='products.product')),
            ],
            options={
                'verbose_name': 'Image',
                'verbose_name_plural': 'Images',
                'ordering': ['created_at'],
            },
        ),
    ]
