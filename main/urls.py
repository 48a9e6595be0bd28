from django.urls import path

from main import views

urlpatterns = [
    path('', views.demo, name='main_demo'),
    path('save/', views.SaveDemoContentView.as_view(), name='main_save'),
]
