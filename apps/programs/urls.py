from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'programs'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.ProgramViewSet, basename='program')

urlpatterns = [
    # Program ViewSet routes
    # GET    /api/programs/                     - List programs
    # POST   /api/programs/                     - Create program (official)
    # GET    /api/programs/{id}/                - Get program details
    # PUT    /api/programs/{id}/                - Update program (official)
    # PATCH  /api/programs/{id}/                - Partial update (official)
    # DELETE /api/programs/{id}/                - Delete program (official)

    # Custom program actions
    # POST   /api/programs/join/                - Join with {userId, programId}
    # GET    /api/programs/calendar/            - Programs by date (?year=&month=)
    # GET    /api/programs/{id}/members/        - List members
    # GET    /api/programs/{id}/registrations/  - Registrations with counts (official)
    # GET    /api/programs/{id}/expenses/       - Expenses against budget (official)

    path('', include(router.urls)),
]
