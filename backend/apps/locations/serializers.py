from rest_framework import serializers

from .models import Province, Locality, Address

# =============================================================================
# E-COMMERCE ARCHITECTURE: Location Serializers
# =============================================================================
# STATUS: Completo
# PURPOSE: Entrada/salida de provincias, localidades y direcciones
# BUSINESS LOGIC: Las FKs se reciben por id y se devuelven anidadas
# =============================================================================


class ProvinceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Province
        fields = ['id', 'name', 'is_active']
        read_only_fields = ['id', 'is_active']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("El nombre de la provincia es obligatorio")
        return value.strip()


class LocalitySerializer(serializers.ModelSerializer):
    """Localidad con su provincia anidada (solo lectura)"""
    province = ProvinceSerializer(read_only=True)

    class Meta:
        model = Locality
        fields = ['id', 'name', 'is_active', 'province']


class LocalityWriteSerializer(serializers.ModelSerializer):
    # allow_null=False: una localidad nunca queda sin provincia
    province = serializers.PrimaryKeyRelatedField(
        queryset=Province.objects.all(), allow_null=False,
        error_messages={'does_not_exist': 'La provincia {pk_value} no existe', 'null': 'La provincia es obligatoria'}
    )

    class Meta:
        model = Locality
        fields = ['id', 'name', 'province']
        read_only_fields = ['id']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("El nombre de la localidad es obligatorio")
        return value.strip()


class AddressSerializer(serializers.ModelSerializer):
    """Dirección con localidad y provincia anidadas"""
    locality = LocalitySerializer(read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Address
        fields = ['id', 'street', 'number', 'floor', 'apartment', 'postal_code',
                  'locality', 'user_id', 'is_active']


class AddressWriteSerializer(serializers.ModelSerializer):
    locality = serializers.PrimaryKeyRelatedField(
        queryset=Locality.objects.filter(is_active=True),
        error_messages={'does_not_exist': 'La localidad {pk_value} no existe o está inactiva'}
    )

    class Meta:
        model = Address
        fields = ['id', 'street', 'number', 'floor', 'apartment', 'postal_code', 'locality', 'user']
        read_only_fields = ['id']
        extra_kwargs = {
            'user': {'required': False, 'allow_null': True},
        }

    def validate_user(self, value):
        if value is not None and not value.is_active:
            raise serializers.ValidationError("El usuario está inactivo")
        return value


class NestedAddressSerializer(serializers.Serializer):
    """Dirección dentro del payload de perfil: con id actualiza, sin id crea"""
    id = serializers.IntegerField(required=False)
    street = serializers.CharField(max_length=255)
    number = serializers.IntegerField(min_value=0)
    floor = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    apartment = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    postal_code = serializers.IntegerField(min_value=0)
    locality = serializers.PrimaryKeyRelatedField(
        queryset=Locality.objects.filter(is_active=True),
        error_messages={'does_not_exist': 'La localidad {pk_value} no existe o está inactiva'}
    )
