from django.urls import path
from . import views

product_urlpatterns = [
    path('', views.product_list_create, name='product-list'),
    path('promociones/', views.promotional_products, name='product-promotions'),
    path('filtrar/', views.filter_products, name='product-filter'),
    path('categorias-disponibles/', views.available_categories, name='product-available-categories'),
    path('colores-disponibles/', views.available_colors, name='product-available-colors'),
    path('talles-disponibles/', views.available_sizes, name='product-available-sizes'),
    path('<int:pk>/', views.product_detail, name='product-detail'),
    path('<int:pk>/reactivar/', views.product_reactivate, name='product-reactivate'),
]

category_urlpatterns = [
    path('', views.category_list_create, name='category-list'),
    path('raices/', views.root_categories, name='category-roots'),
    path('<int:pk>/', views.category_detail, name='category-detail'),
    path('<int:pk>/subcategorias/', views.subcategories, name='category-subcategories'),
    path('<int:pk>/reactivar/', views.category_reactivate, name='category-reactivate'),
]

discount_urlpatterns = [
    path('', views.discount_list_create, name='discount-list'),
    path('<int:pk>/', views.discount_detail, name='discount-detail'),
    path('<int:pk>/reactivar/', views.discount_reactivate, name='discount-reactivate'),
]

variant_urlpatterns = [
    path('', views.variant_list_create, name='variant-list'),
    path('stock-mayor-a/<int:minimum>/', views.variants_with_stock, name='variant-stock-greater'),
    path('producto/<int:product_id>/', views.variants_by_product, name='variant-by-product'),
    path('producto/<int:product_id>/buscar/', views.variant_lookup, name='variant-lookup'),
    path('producto/<int:product_id>/disponible/', views.variant_availability, name='variant-availability'),
    path('producto/<int:product_id>/talles/', views.product_available_sizes, name='variant-product-sizes'),
    path('producto/<int:product_id>/colores/', views.product_available_colors, name='variant-product-colors'),
    path('<int:pk>/', views.variant_detail, name='variant-detail'),
    path('<int:pk>/reactivar/', views.variant_reactivate, name='variant-reactivate'),
    path('<int:pk>/descontar-stock/', views.variant_decrement_stock, name='variant-decrement-stock'),
]

image_urlpatterns = [
    path('', views.image_list_create, name='image-list'),
    path('<int:pk>/', views.image_detail, name='image-detail'),
    path('<int:pk>/reactivar/', views.image_reactivate, name='image-reactivate'),
]
