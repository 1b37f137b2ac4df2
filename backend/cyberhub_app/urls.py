from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin-panel/', admin.site.urls),

    # Client API
    path('api/', include('accounts.urls')),
    path('api/', include('cases.urls')),
    path('api/', include('inventory.urls')),

    # Operator API
    path('api/admin/', include('backoffice.urls')),
]
