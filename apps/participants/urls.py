from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'participants'

router = DefaultRouter()
router.register(r'', views.ParticipantViewSet, basename='participant')

urlpatterns = [
    # GET    /api/participants/                  - List participants (official)
    # POST   /api/participants/                  - Create participant (official)
    # GET    /api/participants/{id}/             - Get participant (official)
    # PUT    /api/participants/{id}/             - Update participant (official)
    # DELETE /api/participants/{id}/             - Delete participant (official)
    # GET    /api/participants/{id}/programs/    - Programs with registration status
    # GET    /api/participants/duplicates/       - Potential duplicates (official)
    # GET    /api/participants/me/               - Own profile
    # POST   /api/participants/me/               - Create own profile from account
    # PATCH  /api/participants/me/               - Update own profile
    path('', include(router.urls)),
]
