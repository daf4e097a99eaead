from django.urls import path
from . import views

province_urlpatterns = [
    path('', views.province_list_create, name='province-list'),
    path('nombre/<str:name>/', views.province_by_name, name='province-by-name'),
    path('<int:pk>/', views.province_detail, name='province-detail'),
    path('<int:pk>/reactivar/', views.province_reactivate, name='province-reactivate'),
]

locality_urlpatterns = [
    path('', views.locality_list_create, name='locality-list'),
    path('por-provincia/<int:province_id>/', views.localities_by_province, name='locality-by-province'),
    path('<int:pk>/', views.locality_detail, name='locality-detail'),
    path('<int:pk>/reactivar/', views.locality_reactivate, name='locality-reactivate'),
]

address_urlpatterns = [
    path('', views.address_list_create, name='address-list'),
    path('localidad/<int:locality_id>/', views.addresses_by_locality, name='address-by-locality'),
    path('<int:pk>/', views.address_detail, name='address-detail'),
    path('<int:pk>/reactivar/', views.address_reactivate, name='address-reactivate'),
]
