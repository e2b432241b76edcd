import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('rooms', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('CONTRIBUTION', 'Contribution'), ('REIMBURSEMENT', 'Reimbursement'), ('REIMBURSEMENT_PAYMENT', 'Reimbursement payment')], max_length=32)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('CONFIRMED', 'Confirmed'), ('REJECTED', 'Rejected')], default='PENDING', max_length=16)),
                ('notes', models.TextField(blank=True)),
                ('merchant_upi_id', models.CharField(blank=True, max_length=100)),
                ('admin_upi_id', models.CharField(blank=True, max_length=100)),
                ('reference_id', models.CharField(blank=True, max_length=100)),
                ('resolved_at', models.DateTimeField(blank=True, null=True)),
                ('reimbursed', models.BooleanField(default=False)),
                ('reimbursed_at', models.DateTimeField(blank=True, null=True)),
                ('member_upi_id', models.CharField(blank=True, max_length=100)),
                ('transaction_date', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transactions', to='rooms.room')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='room_transactions', to=settings.AUTH_USER_MODEL)),
                ('resolved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='resolved_transactions', to=settings.AUTH_USER_MODEL)),
                ('reimbursed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reimbursements_paid', to=settings.AUTH_USER_MODEL)),
                ('reference_transaction', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='ledger.transaction')),
            ],
            options={
                'db_table': 'transactions',
                'ordering': ['-transaction_date'],
                'indexes': [
                    models.Index(fields=['room', 'status'], name='transaction_room_id_status_idx'),
                    models.Index(fields=['room', 'transaction_date'], name='transaction_room_id_date_idx'),
                    models.Index(fields=['user', 'transaction_date'], name='transaction_user_id_date_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(amount__gt=0), name='transaction_amount_positive'),
                    models.UniqueConstraint(condition=models.Q(type='REIMBURSEMENT_PAYMENT'), fields=('reference_transaction',), name='unique_payment_per_reimbursement'),
                ],
            },
        ),
        migrations.CreateModel(
            name='FundSnapshot',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('total_contributions', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('total_reimbursements', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('current_balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('room', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='fund', to='rooms.room')),
            ],
            options={
                'db_table': 'room_funds',
            },
        ),
    ]
