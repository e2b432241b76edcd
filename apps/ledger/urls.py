from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'ledger'

router = SimpleRouter()
router.register(r'transactions', views.TransactionViewSet, basename='transaction')

urlpatterns = [
    # Mounted under /api/rooms/{room_id}/
    # GET    fund/                                   - Fund snapshot
    # GET    transactions/                           - List transactions
    # GET    transactions/pending/                   - Pending transactions (admin)
    # POST   transactions/contribute/                - Submit contribution
    # POST   transactions/reimbursement/             - Submit reimbursement
    # GET    transactions/{id}/                      - Transaction detail
    # POST   transactions/{id}/resolve/              - Confirm / reject (admin)
    # POST   transactions/{id}/mark-reimbursed/      - Record payout (admin)
    # GET    transactions/{id}/payment_link/         - UPI deep link
    # GET    transactions/{id}/qr_code/              - UPI QR code (PNG)
    path('fund/', views.room_fund, name='room-fund'),

    path('', include(router.urls)),
]
