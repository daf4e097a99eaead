from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from apps.products.permissions import IsAdminOrReadOnly
from apps.users.permissions import IsAdminRole, check_owner_or_admin, is_admin
from core.pagination import include_inactive
from .models import Province, Locality, Address
from .serializers import (
    ProvinceSerializer,
    LocalitySerializer,
    LocalityWriteSerializer,
    AddressSerializer,
    AddressWriteSerializer,
)
from . import services

# =============================================================================
# PROVINCIAS - lectura pública, escritura admin
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def province_list_create(request):
    """Lista de provincias activas / alta de provincia"""
    if request.method == 'GET':
        provinces = Province.objects.active()
        serializer = ProvinceSerializer(provinces, many=True)
        return Response({'provinces': serializer.data, 'total_count': provinces.count()})

    serializer = ProvinceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    province = serializer.save()
    return Response({
        'message': 'Provincia creada exitosamente',
        'province': ProvinceSerializer(province).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def province_by_name(request, name):
    province = services.get_province_by_name(name)
    return Response({'province': ProvinceSerializer(province).data})


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def province_detail(request, pk):
    """Detalle, edición y baja lógica de provincia"""
    province = get_object_or_404(Province, pk=pk, is_active=True)

    if request.method == 'GET':
        return Response({'province': ProvinceSerializer(province).data})

    if request.method == 'DELETE':
        province.deactivate()
        return Response({'message': 'Provincia desactivada exitosamente'})

    serializer = ProvinceSerializer(province, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response({'message': 'Provincia actualizada exitosamente', 'province': serializer.data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def province_reactivate(request, pk):
    province = get_object_or_404(Province, pk=pk)
    services.reactivate_province(province)
    return Response({'message': 'Provincia reactivada exitosamente', 'province': ProvinceSerializer(province).data})

# =============================================================================
# LOCALIDADES - lectura pública, escritura admin
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def locality_list_create(request):
    if request.method == 'GET':
        localities = Locality.objects.select_related('province')
        if not include_inactive(request):
            localities = localities.active()
        serializer = LocalitySerializer(localities, many=True)
        return Response({'localities': serializer.data, 'total_count': localities.count()})

    serializer = LocalityWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    locality = serializer.save()
    return Response({
        'message': 'Localidad creada exitosamente',
        'locality': LocalitySerializer(locality).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def localities_by_province(request, province_id):
    localities = services.localities_by_province(province_id)
    serializer = LocalitySerializer(localities, many=True)
    return Response({'localities': serializer.data, 'total_count': len(serializer.data)})


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def locality_detail(request, pk):
    if request.method == 'DELETE':
        services.deactivate_locality(pk)
        return Response({'message': 'Localidad desactivada exitosamente'})

    locality = get_object_or_404(Locality.objects.select_related('province'), pk=pk, is_active=True)

    if request.method == 'GET':
        return Response({'locality': LocalitySerializer(locality).data})

    serializer = LocalityWriteSerializer(locality, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    locality = serializer.save()
    return Response({'message': 'Localidad actualizada exitosamente', 'locality': LocalitySerializer(locality).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def locality_reactivate(request, pk):
    locality = services.reactivate_locality(pk)
    return Response({'message': 'Localidad reactivada exitosamente', 'locality': LocalitySerializer(locality).data})

# =============================================================================
# DIRECCIONES - propietario o admin
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([permissions.IsAuthenticated])
def address_list_create(request):
    """
    GET: todas las direcciones (solo admin)
    POST: alta de dirección; un cliente solo puede crearla para sí mismo
    """
    if request.method == 'GET':
        if not is_admin(request.user):
            return Response({'error': 'Se requiere rol de administrador'}, status=status.HTTP_403_FORBIDDEN)
        addresses = Address.objects.select_related('locality__province')
        if not include_inactive(request):
            addresses = addresses.filter(is_active=True)
        serializer = AddressSerializer(addresses, many=True)
        return Response({'addresses': serializer.data, 'total_count': addresses.count()})

    serializer = AddressWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    owner = serializer.validated_data.get('user') if is_admin(request.user) else request.user
    address = serializer.save(user=owner)
    return Response({
        'message': 'Dirección creada exitosamente',
        'address': AddressSerializer(address).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([permissions.IsAuthenticated])
def address_detail(request, pk):
    address = services.get_active_address(pk)
    check_owner_or_admin(request, address)

    if request.method == 'GET':
        return Response({'address': AddressSerializer(address).data})

    if request.method == 'DELETE':
        address.deactivate()
        return Response({'message': 'Dirección desactivada exitosamente'})

    serializer = AddressWriteSerializer(address, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    # Solo admin puede reasignar o quitar el usuario
    if is_admin(request.user):
        address = serializer.save()
    else:
        address = serializer.save(user=request.user)
    return Response({'message': 'Dirección actualizada exitosamente', 'address': AddressSerializer(address).data})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def address_reactivate(request, pk):
    address = get_object_or_404(Address, pk=pk, is_active=False)
    address.reactivate()
    return Response({'message': 'Dirección reactivada exitosamente', 'address': AddressSerializer(address).data})


@api_view(['GET'])
@permission_classes([IsAdminRole])
def addresses_by_locality(request, locality_id):
    get_object_or_404(Locality, pk=locality_id)
    addresses = Address.objects.filter(locality_id=locality_id, is_active=True).select_related('locality__province')
    serializer = AddressSerializer(addresses, many=True)
    return Response({'addresses': serializer.data, 'total_count': addresses.count()})
