from django.urls import path
from . import views

app_name = 'registrations'

urlpatterns = [
    # Review queue (GET) and official registration (POST)
    path('', views.registrations, name='registrations'),

    # Status reconciliation
    path('update-status/', views.update_status, name='update-status'),

    # Self-service
    path('request/', views.request_to_join, name='request'),
    path('mine/', views.my_registrations, name='mine'),

    path(
        'programs/<int:program_id>/participants/<int:participant_id>/',
        views.remove,
        name='remove'
    ),
]
