# backend/apps/products/tests/test_variants.py

import pytest
from django.urls import reverse
from rest_framework import status

from apps.products.models import ProductVariant
from apps.products import services
from core.exceptions import InsufficientStockError

@pytest.mark.django_db
class TestVariantViews:

    def test_create_variant(self, admin_client, product):
        data = {
            'product': product.id,
            'purchase_price': '70.00',
            'current_stock': 4,
            'quantity': 4,
            'max_stock': 8,
            'color': 'ROJO',
            'size': 'S',
        }

        response = admin_client.post(reverse('variant-list'), data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['variant']['product'] == product.id

    def test_create_variant_inactive_product(self, admin_client, product):
        product.deactivate()
        data = {'product': product.id, 'purchase_price': '70.00', 'color': 'ROJO', 'size': 'S'}

        response = admin_client.post(reverse('variant-list'), data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'product' in response.data

    def test_create_variant_invalid_color(self, admin_client, product):
        data = {'product': product.id, 'purchase_price': '70.00', 'color': 'FUCSIA', 'size': 'S'}

        response = admin_client.post(reverse('variant-list'), data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'color' in response.data

    def test_list_filtered(self, api_client, variant, second_variant, product):
        url = reverse('variant-list')

        response = api_client.get(url, {'product': product.id, 'color': 'blanco'})

        assert [v['id'] for v in response.data['variants']] == [second_variant.id]

    def test_list_filtered_by_min_stock(self, api_client, variant, second_variant):
        response = api_client.get(reverse('variant-list'), {'min_stock': 5})

        assert [v['id'] for v in response.data['variants']] == [variant.id]

    def test_list_invalid_numeric_param(self, api_client):
        response = api_client.get(reverse('variant-list'), {'min_stock': 'muchos'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_variants_by_product(self, api_client, product, variant, second_variant):
        second_variant.deactivate()

        response = api_client.get(reverse('variant-by-product', args=[product.id]))

        assert response.data['total_count'] == 1

    def test_lookup_by_size_and_color(self, api_client, product, variant):
        url = reverse('variant-lookup', args=[product.id])

        response = api_client.get(url, {'size': 'm', 'color': 'negro'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['variant']['id'] == variant.id

    def test_lookup_not_found(self, api_client, product, variant):
        response = api_client.get(reverse('variant-lookup', args=[product.id]), {'size': 'XL', 'color': 'NEGRO'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_lookup_missing_params(self, api_client, product):
        response = api_client.get(reverse('variant-lookup', args=[product.id]), {'size': 'M'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_availability(self, api_client, product, variant):
        url = reverse('variant-availability', args=[product.id])

        assert api_client.get(url, {'size': 'M', 'color': 'NEGRO'}).data['available'] is True

        variant.current_stock = 0
        variant.save()
        assert api_client.get(url, {'size': 'M', 'color': 'NEGRO'}).data['available'] is False

    def test_product_sizes_and_colors(self, api_client, product, variant, second_variant):
        sizes = api_client.get(reverse('variant-product-sizes', args=[product.id]))
        colors = api_client.get(reverse('variant-product-colors', args=[product.id]))

        assert sizes.data['sizes'] == ['L', 'M']
        assert colors.data['colors'] == ['BLANCO', 'NEGRO']

    def test_stock_greater_than(self, api_client, variant, second_variant):
        """Estrictamente mayor al mínimo indicado"""
        response = api_client.get(reverse('variant-stock-greater', args=[3]))

        assert [v['id'] for v in response.data['variants']] == [variant.id]

    def test_soft_delete_and_reactivate(self, admin_client, variant):
        url = reverse('variant-detail', args=[variant.id])

        assert admin_client.delete(url).status_code == status.HTTP_200_OK
        assert admin_client.get(url).status_code == status.HTTP_404_NOT_FOUND

        response = admin_client.patch(reverse('variant-reactivate', args=[variant.id]))
        assert response.data['variant']['is_active'] is True

@pytest.mark.django_db
class TestStockDecrement:

    def test_decrement_stock(self, admin_client, variant):
        url = reverse('variant-decrement-stock', args=[variant.id])

        response = admin_client.post(url, {'quantity': 4})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['variant']['current_stock'] == 6
        variant.refresh_from_db()
        assert variant.current_stock == 6

    def test_decrement_more_than_available(self, admin_client, variant):
        """Test stock insuficiente no modifica la variante"""
        url = reverse('variant-decrement-stock', args=[variant.id])

        response = admin_client.post(url, {'quantity': 11})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Stock insuficiente' in response.data['error']
        variant.refresh_from_db()
        assert variant.current_stock == 10

    def test_decrement_requires_positive_quantity(self, admin_client, variant):
        response = admin_client.post(reverse('variant-decrement-stock', args=[variant.id]), {'quantity': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_decrement_unknown_variant(self, admin_client):
        response = admin_client.post(reverse('variant-decrement-stock', args=[9999]), {'quantity': 1})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_decrement_customer_forbidden(self, authenticated_client, variant):
        response = authenticated_client.post(reverse('variant-decrement-stock', args=[variant.id]), {'quantity': 1})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_service_keeps_stock_non_negative(self, variant):
        services.decrement_stock(variant.id, 10)

        with pytest.raises(InsufficientStockError):
            services.decrement_stock(variant.id, 1)

        assert ProductVariant.objects.get(pk=variant.id).current_stock == 0

    def test_is_available_service(self, variant):
        assert services.is_available(variant.product_id, 'M', 'NEGRO') is True
        services.decrement_stock(variant.id, 10)
        assert services.is_available(variant.product_id, 'M', 'NEGRO') is False

    def test_release_stock(self, variant):
        services.release_stock(variant, 3)

        variant.refresh_from_db()
        assert variant.current_stock == 13
