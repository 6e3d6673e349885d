from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

router = DefaultRouter()
router.register(r'', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # GET    /api/expenses/          - List expenses (filters: program, category, date_from, date_to, year, month)
    # POST   /api/expenses/          - Record expense
    # GET    /api/expenses/{id}/     - Get expense
    # PUT    /api/expenses/{id}/     - Update expense
    # PATCH  /api/expenses/{id}/     - Partial update
    # DELETE /api/expenses/{id}/     - Delete expense
    path('', include(router.urls)),
]
