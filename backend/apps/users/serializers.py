from rest_framework import serializers

from apps.locations.serializers import AddressSerializer, NestedAddressSerializer
from core.choices import ROLE_ADMIN, ROLE_CUSTOMER
from core.exceptions import ConflictError
from .models import User

NEW_ADDRESS_FIELDS = ('street', 'number', 'postal_code', 'locality')

# =============================================================================
# E-COMMERCE ARCHITECTURE: User Authentication & Registration
# =============================================================================
# STATUS: Completo
# PURPOSE: Registro, login y cambio de credenciales
# BUSINESS LOGIC: Email único entre cuentas (409), username = email al registrarse
# =============================================================================

class UserRegistrationSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=True, min_length=6)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, default=ROLE_CUSTOMER)

    class Meta:
        model = User
        fields = ['email', 'password', 'first_name', 'last_name',
                  'dni', 'sex', 'birth_date', 'phone', 'role']
        extra_kwargs = {
            'first_name': {'required': True, 'allow_blank': False},
            'last_name': {'required': True, 'allow_blank': False},
            # la unicidad se valida en validate_email para responder 409
            'email': {'validators': []},
        }

    def validate_email(self, value):
        value = value.lower()
        if User.objects.filter(email__iexact=value).exists() or User.objects.filter(username=value).exists():
            raise ConflictError("El email ya está registrado")
        return value

    def validate_role(self, value):
        # Solo un admin autenticado puede crear otro admin
        request = self.context.get('request')
        if value == ROLE_ADMIN and not (request and request.user.is_authenticated and request.user.is_admin):
            return ROLE_CUSTOMER
        return value

    def create(self, validated_data):
        email = validated_data.pop('email')
        password = validated_data.pop('password')
        return User.objects.create_user(username=email, email=email, password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    """Serializer para login con email o username"""
    login = serializers.CharField(required=False)
    email = serializers.CharField(required=False)
    username = serializers.CharField(required=False)
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        login_field = attrs.get('login') or attrs.get('email') or attrs.get('username')
        if not login_field:
            raise serializers.ValidationError("Debe incluir 'login', 'email' o 'username'")
        attrs['login'] = login_field
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class UpdateCredentialsSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_email = serializers.EmailField(required=False)
    new_password = serializers.CharField(write_only=True, required=False, min_length=6)

    def validate(self, attrs):
        if not attrs.get('new_email') and not attrs.get('new_password'):
            raise serializers.ValidationError("Debe indicar un nuevo email o una nueva contraseña")
        return attrs


class ReactivateUserSerializer(serializers.Serializer):
    email = serializers.EmailField()
    username = serializers.CharField(max_length=150)

# =============================================================================
# E-COMMERCE ARCHITECTURE: User Profile Serializers
# =============================================================================
# STATUS: Completo
# PURPOSE: DTO de usuario con direcciones (localidad + provincia) e imagen de perfil
# =============================================================================

class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()
    addresses = serializers.SerializerMethodField()
    profile_image = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'username', 'first_name', 'last_name', 'full_name',
                  'dni', 'sex', 'birth_date', 'phone', 'role', 'is_active',
                  'addresses', 'profile_image', 'created_at', 'updated_at', 'deactivated_at']
        read_only_fields = fields

    def get_addresses(self, obj):
        addresses = [address for address in obj.addresses.all() if address.is_active]
        return AddressSerializer(addresses, many=True).data

    def get_profile_image(self, obj):
        image = obj.profile_image
        if image is None or not image.is_active:
            return None
        return {'id': image.id, 'url': image.name}


class PublicUserSerializer(serializers.ModelSerializer):
    """Vista pública por username"""
    full_name = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'full_name']


class ProfileUpdateSerializer(serializers.ModelSerializer):
    addresses = NestedAddressSerializer(many=True, required=False)

    class Meta:
        model = User
        fields = ['first_name', 'last_name', 'dni', 'sex', 'birth_date', 'phone', 'addresses']

    def validate_addresses(self, value):
        # Una dirección nueva (sin id) debe venir completa aunque el PATCH sea parcial
        errors = []
        for entry in value:
            missing = [] if entry.get('id') is not None else [
                field for field in NEW_ADDRESS_FIELDS if entry.get(field) is None
            ]
            errors.append({field: ['Este campo es requerido.'] for field in missing})
        if any(errors):
            raise serializers.ValidationError(errors)
        return value
