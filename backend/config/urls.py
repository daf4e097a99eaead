"""
URL configuration for the e-commerce backend.

Todas las rutas de la API cuelgan de /api/; los archivos subidos se sirven
desde MEDIA_URL (/uploads/).
"""
from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.locations import urls as location_urls
from apps.orders import urls as order_urls
from apps.products import urls as product_urls
from apps.users import urls as user_urls


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    return Response({'message': 'API de e-commerce funcionando'})


api_urlpatterns = [
    path('auth/', include(user_urls.auth_urlpatterns)),
    path('usuarios/', include(user_urls.urlpatterns)),
    path('provincias/', include(location_urls.province_urlpatterns)),
    path('localidades/', include(location_urls.locality_urlpatterns)),
    path('direcciones/', include(location_urls.address_urlpatterns)),
    path('categorias/', include(product_urls.category_urlpatterns)),
    path('descuentos/', include(product_urls.discount_urlpatterns)),
    path('productos/', include(product_urls.product_urlpatterns)),
    path('productos-detalle/', include(product_urls.variant_urlpatterns)),
    path('imagenes/', include(product_urls.image_urlpatterns)),
    path('ordenes/', include(order_urls.order_urlpatterns)),
    path('ordenes-detalle/', include(order_urls.line_urlpatterns)),
]

urlpatterns = [
    path('', health, name='health'),
    path('api/', include(api_urlpatterns)),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
