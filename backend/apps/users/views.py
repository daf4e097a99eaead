import logging

from django.contrib.auth import authenticate
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.locations.models import Address
from apps.locations.serializers import AddressSerializer, AddressWriteSerializer
from core.pagination import AdminPagination, include_inactive, paginated_response
from .models import User
from .permissions import IsAdminRole, check_owner_or_admin
from .serializers import (
    UserRegistrationSerializer,
    LoginSerializer,
    LogoutSerializer,
    UpdateCredentialsSerializer,
    ReactivateUserSerializer,
    UserSerializer,
    PublicUserSerializer,
    ProfileUpdateSerializer,
)
from .tokens import tokens_for_user
from . import services

logger = logging.getLogger(__name__)

# =============================================================================
# AUTH ENDPOINTS
# =============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Registro para usuario nuevo"""
    serializer = UserRegistrationSerializer(data=request.data, context={'request': request})
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    logger.info("Usuario registrado: %s", user.email)
    return Response({
        'message': 'Usuario registrado exitosamente',
        'user': UserSerializer(services.get_active_user(user.pk)).data,
        **tokens_for_user(user),
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login con email o username"""
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data
    user = authenticate(request, username=data['login'], password=data['password'])
    if user and user.is_active:
        return Response({
            'message': 'Login exitoso',
            'user': UserSerializer(services.get_active_user(user.pk)).data,
            **tokens_for_user(user),
        })
    return Response({'error': 'Credenciales inválidas o cuenta inactiva'}, status=status.HTTP_401_UNAUTHORIZED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout: invalida el refresh token"""
    serializer = LogoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        token = RefreshToken(serializer.validated_data['refresh'])
        token.blacklist()
    except TokenError:
        return Response({'error': 'Token inválido o expirado'}, status=status.HTTP_400_BAD_REQUEST)
    return Response({'message': 'Sesión cerrada exitosamente'})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    """Usuario autenticado actual"""
    return Response({'user': UserSerializer(services.get_active_user(request.user.pk)).data})


@api_view(['PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Actualizar perfil (y opcionalmente sincronizar direcciones)"""
    serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = services.update_profile(request.user, dict(serializer.validated_data))
    return Response({'message': 'Perfil actualizado exitosamente', 'user': UserSerializer(user).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_profile_image(request):
    uploaded = request.FILES.get('image')
    if uploaded is None:
        return Response({'error': "No se recibió ningún archivo en el campo 'image'"}, status=status.HTTP_400_BAD_REQUEST)
    user = services.upload_profile_image(request.user, uploaded, request=request)
    return Response({'message': 'Imagen de perfil actualizada', 'user': UserSerializer(user).data})


@api_view(['PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def update_credentials(request):
    """Cambio de email y/o contraseña; devuelve tokens nuevos"""
    serializer = UpdateCredentialsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = services.update_credentials(request.user, **serializer.validated_data)
    return Response({
        'message': 'Credenciales actualizadas exitosamente',
        'user': UserSerializer(services.get_active_user(user.pk)).data,
        **tokens_for_user(user),
    })


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def deactivate_own_account(request):
    services.deactivate_user(request.user)
    return Response({'message': 'Cuenta desactivada exitosamente'})

# =============================================================================
# USUARIOS - administración
# =============================================================================

@api_view(['GET'])
@permission_classes([IsAdminRole])
def user_list(request):
    """Lista de usuarios (admin). ?include_inactive=true incluye dados de baja"""
    users = services.user_queryset()
    if not include_inactive(request):
        users = users.filter(is_active=True)
    return paginated_response(request, users, UserSerializer, 'users', paginator_class=AdminPagination)


@api_view(['GET'])
@permission_classes([IsAdminRole])
def user_detail(request, pk):
    user = get_object_or_404(services.user_queryset(), pk=pk)
    return Response({'user': UserSerializer(user).data})


@api_view(['GET'])
@permission_classes([AllowAny])
def user_by_username(request, username):
    user = get_object_or_404(User, username=username, is_active=True)
    return Response({'user': PublicUserSerializer(user).data})


@api_view(['DELETE'])
@permission_classes([IsAdminRole])
def user_deactivate(request, pk):
    user = get_object_or_404(User, pk=pk)
    services.deactivate_user(user)
    return Response({'message': 'Usuario desactivado exitosamente'})


@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def user_reactivate(request, pk):
    """Reactivar cuenta: requiere email y username nuevos"""
    serializer = ReactivateUserSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = services.reactivate_user(pk, **serializer.validated_data)
    return Response({'message': 'Usuario reactivado exitosamente', 'user': UserSerializer(user).data})

# =============================================================================
# DIRECCIONES DEL USUARIO - propietario o admin
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def user_addresses(request, pk):
    user = services.get_active_user(pk)
    check_owner_or_admin(request, user)

    if request.method == 'GET':
        addresses = Address.objects.filter(user=user, is_active=True).select_related('locality__province')
        serializer = AddressSerializer(addresses, many=True)
        return Response({'addresses': serializer.data, 'total_count': addresses.count()})

    serializer = AddressWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    address = serializer.save(user=user)
    return Response({
        'message': 'Dirección agregada exitosamente',
        'address': AddressSerializer(address).data
    }, status=status.HTTP_201_CREATED)


@api_view(['PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def user_address_detail(request, pk, address_id):
    user = services.get_active_user(pk)
    check_owner_or_admin(request, user)
    address = get_object_or_404(Address, pk=address_id, user=user, is_active=True)

    if request.method == 'DELETE':
        address.deactivate()
        return Response({'message': 'Dirección eliminada exitosamente'})

    serializer = AddressWriteSerializer(address, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    address = serializer.save(user=user)
    return Response({'message': 'Dirección actualizada exitosamente', 'address': AddressSerializer(address).data})
