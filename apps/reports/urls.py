from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    # Expenses
    path('expenses/', views.expense_report, name='expense-report'),
    path('expenses/monthly/', views.monthly_expenses, name='monthly-expenses'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
]
