from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('', RedirectView.as_view(url='/main/', permanent=False), name='home'),
    path('main/', include('main.urls')),
]
