from django.urls import path
from . import views

order_urlpatterns = [
    path('', views.order_list_create, name='order-list'),
    path('<int:pk>/', views.order_detail, name='order-detail'),
    path('<int:pk>/reactivar/', views.order_reactivate, name='order-reactivate'),
]

line_urlpatterns = [
    path('', views.line_list_create, name='order-line-list'),
    path('orden/<int:order_id>/', views.lines_by_order, name='order-line-by-order'),
    path('variante/<int:variant_id>/', views.lines_by_variant, name='order-line-by-variant'),
    path('<int:pk>/', views.line_detail, name='order-line-detail'),
    path('<int:pk>/reactivar/', views.line_reactivate, name='order-line-reactivate'),
]
