# backend/apps/users/tests/test_views.py
import pytest
from django.urls import reverse
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status

from apps.locations.models import Address

User = get_user_model()

@pytest.mark.django_db
class TestUserRegistrationView:

    def test_register_success(self, api_client, registration_data):
        """Test registro exitoso"""
        url = reverse('user-register')

        response = api_client.post(url, registration_data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'user' in response.data
        assert 'token' in response.data
        assert 'refresh' in response.data
        assert response.data['message'] == 'Usuario registrado exitosamente'
        assert response.data['user']['role'] == 'customer'
        assert 'password' not in response.data['user']

        # Verificar que el usuario fue creado en la base de datos
        user = User.objects.get(email=registration_data['email'])
        assert user.username == registration_data['email']
        assert user.check_password(registration_data['password'])

    def test_register_duplicate_email(self, api_client, registration_data, user):
        """Test registro con email duplicado"""
        url = reverse('user-register')
        data = registration_data.copy()
        data['email'] = user.email.upper()

        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'El email ya está registrado'

    def test_register_missing_fields(self, api_client):
        """Test registro sin campos obligatorios"""
        url = reverse('user-register')

        response = api_client.post(url, {'email': 'x@example.com'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data
        assert 'first_name' in response.data

    def test_register_admin_role_ignored_for_anonymous(self, api_client, registration_data):
        """Un anónimo no puede auto-asignarse rol admin"""
        url = reverse('user-register')
        data = registration_data.copy()
        data['role'] = 'admin'

        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email=data['email']).role == 'customer'

    def test_admin_can_register_admin(self, admin_client, registration_data):
        url = reverse('user-register')
        data = registration_data.copy()
        data['role'] = 'admin'

        response = admin_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email=data['email']).role == 'admin'

    def test_register_token_is_usable(self, api_client, registration_data):
        """El token devuelto autentica contra /me"""
        response = api_client.post(reverse('user-register'), registration_data)

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
        me = api_client.get(reverse('user-me'))

        assert me.status_code == status.HTTP_200_OK
        assert me.data['user']['email'] == registration_data['email']

@pytest.mark.django_db
class TestUserLoginView:

    def test_login_with_email(self, api_client, user):
        """Test login con email"""
        url = reverse('user-login')
        data = {'email': 'test@example.com', 'password': 'testpass123'}

        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'token' in response.data
        assert 'refresh' in response.data
        assert response.data['user']['email'] == user.email
        assert response.data['message'] == 'Login exitoso'

    def test_login_with_login_field(self, api_client, user):
        url = reverse('user-login')

        response = api_client.post(url, {'login': 'test@example.com', 'password': 'testpass123'})

        assert response.status_code == status.HTTP_200_OK

    def test_login_with_username(self, api_client):
        """Test login con username"""
        User.objects.create_user(email='juan@example.com', username='juanp', password='testpass123')
        url = reverse('user-login')

        response = api_client.post(url, {'username': 'juanp', 'password': 'testpass123'})

        assert response.status_code == status.HTTP_200_OK

    def test_login_invalid_credentials(self, api_client, user):
        """Test login con credenciales inválidas"""
        url = reverse('user-login')
        data = {'email': 'test@example.com', 'password': 'wrongpassword'}

        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Credenciales inválidas o cuenta inactiva'

    def test_login_inactive_user(self, api_client, user):
        """Test login de usuario inactivo"""
        user.is_active = False
        user.save()
        url = reverse('user-login')

        response = api_client.post(url, {'email': 'test@example.com', 'password': 'testpass123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_identifier(self, api_client):
        """Test login sin email ni username"""
        url = reverse('user-login')

        response = api_client.post(url, {'password': 'testpass123'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

@pytest.mark.django_db
class TestLogoutView:

    def test_logout_blacklists_refresh(self, api_client, authenticated_client, user):
        """El refresh usado en logout ya no sirve para renovar"""
        login = api_client.post(reverse('user-login'), {'email': user.email, 'password': 'testpass123'})
        refresh = login.data['refresh']

        response = authenticated_client.post(reverse('user-logout'), {'refresh': refresh})
        assert response.status_code == status.HTTP_200_OK

        renew = api_client.post(reverse('token-refresh'), {'refresh': refresh})
        assert renew.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_invalid_token(self, authenticated_client):
        response = authenticated_client.post(reverse('user-logout'), {'refresh': 'no-es-un-token'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

@pytest.mark.django_db
class TestUserProfileView:

    def test_get_current_user(self, authenticated_client, user):
        """Test obtener usuario actual"""
        url = reverse('user-me')

        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == user.email
        assert response.data['user']['addresses'] == []
        assert response.data['user']['profile_image'] is None

    def test_unauthenticated_access(self, api_client):
        """Test acceso sin autenticación"""
        url = reverse('user-me')

        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_profile(self, authenticated_client, user):
        """Test actualizar perfil"""
        url = reverse('user-profile-update')
        data = {'first_name': 'Updated', 'phone': '9876543210'}

        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['first_name'] == 'Updated'
        user.refresh_from_db()
        assert user.phone == '9876543210'

    def test_update_profile_syncs_addresses(self, authenticated_client, user, locality):
        """Con id actualiza, sin id crea, las que faltan se eliminan"""
        kept = Address.objects.create(street='San Martín', number=100, postal_code=5501, locality=locality, user=user)
        removed = Address.objects.create(street='Belgrano', number=20, postal_code=5501, locality=locality, user=user)
        url = reverse('user-profile-update')
        data = {
            'addresses': [
                {'id': kept.id, 'street': 'San Martín', 'number': 150, 'postal_code': 5501, 'locality': locality.id},
                {'street': 'Mitre', 'number': 45, 'floor': '2', 'apartment': 'B',
                 'postal_code': 5500, 'locality': locality.id},
            ]
        }

        response = authenticated_client.patch(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['user']['addresses']) == 2
        kept.refresh_from_db()
        assert kept.number == 150
        assert not Address.objects.filter(pk=removed.pk).exists()
        assert Address.objects.filter(user=user, street='Mitre').exists()

    def test_update_profile_empty_addresses_removes_all(self, authenticated_client, user, locality):
        Address.objects.create(street='San Martín', number=100, postal_code=5501, locality=locality, user=user)

        response = authenticated_client.patch(reverse('user-profile-update'), {'addresses': []}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert not Address.objects.filter(user=user).exists()

    def test_update_profile_new_address_missing_fields(self, authenticated_client, user, locality):
        """Una dirección nueva incompleta es un 400, no un conflicto"""
        data = {'addresses': [{'street': 'Sin numero', 'locality': locality.id}]}

        response = authenticated_client.patch(reverse('user-profile-update'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'number' in response.data['addresses'][0]
        assert 'postal_code' in response.data['addresses'][0]
        assert not Address.objects.filter(user=user).exists()

    def test_update_profile_unknown_address_id(self, authenticated_client, other_user, locality):
        """Una dirección ajena no se puede editar desde el perfil"""
        foreign = Address.objects.create(street='Ajena', number=1, postal_code=5501, locality=locality, user=other_user)
        data = {'addresses': [{'id': foreign.id, 'street': 'X', 'number': 1, 'postal_code': 1, 'locality': locality.id}]}

        response = authenticated_client.patch(reverse('user-profile-update'), data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        foreign.refresh_from_db()
        assert foreign.street == 'Ajena'

    def test_upload_profile_image(self, authenticated_client, user, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        upload = SimpleUploadedFile('avatar.png', b'\x89PNG\r\n\x1a\nfake', content_type='image/png')

        response = authenticated_client.post(reverse('user-profile-image'), {'image': upload}, format='multipart')

        assert response.status_code == status.HTTP_200_OK
        image = response.data['user']['profile_image']
        assert image is not None
        assert '/uploads/' in image['url']
        assert image['url'].endswith('.png')
        user.refresh_from_db()
        assert user.profile_image_id == image['id']
        assert len(list(tmp_path.iterdir())) == 1

    def test_upload_profile_image_missing_file(self, authenticated_client):
        response = authenticated_client.post(reverse('user-profile-image'), {}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

@pytest.mark.django_db
class TestUpdateCredentialsView:

    def test_change_password(self, authenticated_client, api_client, user):
        url = reverse('user-update-credentials')
        data = {'current_password': 'testpass123', 'new_password': 'otraclave456'}

        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'token' in response.data
        login = api_client.post(reverse('user-login'), {'email': user.email, 'password': 'otraclave456'})
        assert login.status_code == status.HTTP_200_OK

    def test_wrong_current_password(self, authenticated_client):
        url = reverse('user-update-credentials')
        data = {'current_password': 'incorrecta', 'new_password': 'otraclave456'}

        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_same_password_rejected(self, authenticated_client):
        url = reverse('user-update-credentials')
        data = {'current_password': 'testpass123', 'new_password': 'testpass123'}

        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_nothing_to_change(self, authenticated_client):
        response = authenticated_client.patch(reverse('user-update-credentials'), {'current_password': 'testpass123'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_email_taken(self, authenticated_client, other_user):
        url = reverse('user-update-credentials')
        data = {'current_password': 'testpass123', 'new_email': other_user.email}

        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_change_email_invalidates_old_token(self, authenticated_client, user):
        """Cambiar el email deja inválidos los tokens emitidos antes"""
        url = reverse('user-update-credentials')
        data = {'current_password': 'testpass123', 'new_email': 'nuevo.mail@example.com'}

        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.email == 'nuevo.mail@example.com'
        assert user.username == 'nuevo.mail@example.com'

        old = authenticated_client.get(reverse('user-me'))
        assert old.status_code == status.HTTP_401_UNAUTHORIZED

        authenticated_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
        new = authenticated_client.get(reverse('user-me'))
        assert new.status_code == status.HTTP_200_OK

@pytest.mark.django_db
class TestAccountDeactivation:

    def test_deactivate_own_account(self, authenticated_client, user):
        response = authenticated_client.delete(reverse('user-deactivate-self'))

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.is_active is False

        # El token ya no autentica
        assert authenticated_client.get(reverse('user-me')).status_code == status.HTTP_401_UNAUTHORIZED

    def test_email_reusable_after_deactivation(self, authenticated_client, api_client, registration_data, user):
        authenticated_client.delete(reverse('user-deactivate-self'))
        data = registration_data.copy()
        data['email'] = 'test@example.com'

        response = api_client.post(reverse('user-register'), data)

        assert response.status_code == status.HTTP_201_CREATED

    def test_admin_deactivate_user(self, admin_client, user):
        response = admin_client.delete(reverse('user-deactivate', args=[user.id]))

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.is_active is False

    def test_admin_deactivate_already_inactive(self, admin_client, deactivated_user):
        response = admin_client.delete(reverse('user-deactivate', args=[deactivated_user.id]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_admin_reactivate_user(self, admin_client, deactivated_user):
        url = reverse('user-reactivate', args=[deactivated_user.id])

        response = admin_client.patch(url, {'email': 'vuelve@example.com', 'username': 'vuelve'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == 'vuelve@example.com'
        assert response.data['user']['is_active'] is True

    def test_reactivate_with_taken_email(self, admin_client, deactivated_user, user):
        url = reverse('user-reactivate', args=[deactivated_user.id])

        response = admin_client.patch(url, {'email': user.email, 'username': 'otro'})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_reactivate_active_user(self, admin_client, user):
        url = reverse('user-reactivate', args=[user.id])

        response = admin_client.patch(url, {'email': 'x@example.com', 'username': 'x'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_customer_cannot_deactivate_others(self, authenticated_client, other_user):
        response = authenticated_client.delete(reverse('user-deactivate', args=[other_user.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN

@pytest.mark.django_db
class TestUserAdministration:

    def test_list_users_admin(self, admin_client, user, deactivated_user):
        response = admin_client.get(reverse('user-list'))

        assert response.status_code == status.HTTP_200_OK
        emails = [item['email'] for item in response.data['results']['users']]
        assert user.email in emails
        assert deactivated_user.email not in emails

    def test_list_users_include_inactive(self, admin_client, deactivated_user):
        response = admin_client.get(reverse('user-list'), {'include_inactive': 'true'})

        ids = [item['id'] for item in response.data['results']['users']]
        assert deactivated_user.id in ids

    def test_list_users_customer_forbidden(self, authenticated_client):
        response = authenticated_client.get(reverse('user-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert 'error' in response.data

    def test_user_detail_admin(self, admin_client, user):
        response = admin_client.get(reverse('user-detail', args=[user.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['id'] == user.id

    def test_user_by_username_public(self, api_client, user):
        response = api_client.get(reverse('user-by-username', args=[user.username]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['full_name'] == 'Test User'
        assert 'email' not in response.data['user']

    def test_user_by_username_not_found(self, api_client):
        response = api_client.get(reverse('user-by-username', args=['nadie']))

        assert response.status_code == status.HTTP_404_NOT_FOUND

@pytest.mark.django_db
class TestUserAddressesView:

    def test_owner_adds_address(self, authenticated_client, user, locality):
        url = reverse('user-addresses', args=[user.id])
        data = {'street': 'Colón', 'number': 300, 'postal_code': 5500, 'locality': locality.id}

        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['address']['user_id'] == user.id
        assert response.data['address']['locality']['province']['name'] == 'Mendoza'

    def test_list_own_addresses(self, authenticated_client, user, locality):
        Address.objects.create(street='Colón', number=300, postal_code=5500, locality=locality, user=user)

        response = authenticated_client.get(reverse('user-addresses', args=[user.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_count'] == 1

    def test_other_customer_forbidden(self, other_client, user):
        response = other_client.get(reverse('user-addresses', args=[user.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_can_manage_addresses(self, admin_client, user, locality):
        address = Address.objects.create(street='Colón', number=300, postal_code=5500, locality=locality, user=user)
        url = reverse('user-address-detail', args=[user.id, address.id])

        response = admin_client.patch(url, {'number': 301})
        assert response.status_code == status.HTTP_200_OK
        assert response.data['address']['number'] == 301

        response = admin_client.delete(url)
        assert response.status_code == status.HTTP_200_OK
        address.refresh_from_db()
        assert address.is_active is False

    def test_address_detail_from_another_user(self, authenticated_client, user, other_user, locality):
        foreign = Address.objects.create(street='Ajena', number=1, postal_code=5500, locality=locality, user=other_user)

        response = authenticated_client.delete(reverse('user-address-detail', args=[user.id, foreign.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
