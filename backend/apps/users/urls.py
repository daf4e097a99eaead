from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from . import views

auth_urlpatterns = [
    path('register/', views.register, name='user-register'),
    path('login/', views.login, name='user-login'),
    path('refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('logout/', views.logout, name='user-logout'),
    path('me/', views.me, name='user-me'),
    path('profile/', views.update_profile, name='user-profile-update'),
    path('profile/upload-image/', views.upload_profile_image, name='user-profile-image'),
    path('update-credentials/', views.update_credentials, name='user-update-credentials'),
    path('deactivate/', views.deactivate_own_account, name='user-deactivate-self'),
]

urlpatterns = [
    path('', views.user_list, name='user-list'),
    path('username/<str:username>/', views.user_by_username, name='user-by-username'),
    path('<int:pk>/', views.user_detail, name='user-detail'),
    path('<int:pk>/desactivar/', views.user_deactivate, name='user-deactivate'),
    path('<int:pk>/reactivar/', views.user_reactivate, name='user-reactivate'),
    path('<int:pk>/direcciones/', views.user_addresses, name='user-addresses'),
    path('<int:pk>/direcciones/<int:address_id>/', views.user_address_detail, name='user-address-detail'),
]
