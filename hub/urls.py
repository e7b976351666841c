from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/users/', include('users.urls')),
    path('api/', include('players.urls')),
    path('api/entries/', include('wellness.urls')),
    path('api/sheets/', include('sheets.urls')),
]
