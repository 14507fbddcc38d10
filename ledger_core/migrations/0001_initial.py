from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AccountGroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                ("ac_type", models.CharField(choices=[("Asset", "Asset"), ("Liability", "Liability"), ("Equity", "Equity"), ("Income", "Income"), ("Expense", "Expense")], max_length=10)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["ac_type", "name"],
            },
        ),
        migrations.CreateModel(
            name="Party",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("party_type", models.CharField(choices=[("customer", "Customer"), ("supplier", "Supplier")], max_length=10)),
                ("code", models.CharField(blank=True, default="", max_length=32)),
                ("name", models.CharField(max_length=200)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("address", models.TextField(blank=True, default="")),
                ("tax_number", models.CharField(blank=True, default="", max_length=50)),
                ("is_active", models.BooleanField(default=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "parties",
                "indexes": [models.Index(fields=["party_type", "name"], name="party_type_name_idx")],
                "constraints": [models.UniqueConstraint(condition=models.Q(("code", ""), _negated=True), fields=("party_type", "code"), name="uq_party_type_code")],
            },
        ),
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=32, unique=True)),
                ("name", models.CharField(max_length=200)),
                ("ac_type", models.CharField(choices=[("Asset", "Asset"), ("Liability", "Liability"), ("Equity", "Equity"), ("Income", "Income"), ("Expense", "Expense")], max_length=10)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("opening_balance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("opening_balance_side", models.CharField(choices=[("Dr", "Debit"), ("Cr", "Credit")], default="Dr", max_length=2)),
                ("is_active", models.BooleanField(default=True)),
                ("is_system", models.BooleanField(default=False)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("group", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="accounts", to="ledger_core.accountgroup")),
                ("party", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="account", to="ledger_core.party")),
            ],
            options={
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["ac_type"], name="account_type_idx"),
                    models.Index(fields=["is_active", "deleted_at"], name="account_active_idx"),
                ],
                "constraints": [models.CheckConstraint(condition=models.Q(("opening_balance__gte", 0)), name="account_opening_balance_non_negative")],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=32, unique=True)),
                ("name", models.CharField(max_length=200)),
                ("group", models.CharField(blank=True, default="", max_length=100)),
                ("unit", models.CharField(blank=True, default="Pcs", max_length=20)),
                ("purchase_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("sales_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("mrp", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("is_active", models.BooleanField(default=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["code"],
                "constraints": [models.CheckConstraint(condition=models.Q(("purchase_rate__gte", 0), ("sales_rate__gte", 0), ("mrp__gte", 0)), name="product_rates_non_negative")],
            },
        ),
        migrations.CreateModel(
            name="VoucherSequence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("voucher_type", models.CharField(choices=[("sales_invoice", "Sales Invoice"), ("purchase_invoice", "Purchase Invoice"), ("sales_return", "Sales Return"), ("purchase_return", "Purchase Return"), ("payment", "Payment"), ("receipt", "Receipt"), ("journal", "Journal"), ("opening_balance", "Opening Balance"), ("opening_stock", "Opening Stock")], max_length=20, unique=True)),
                ("prefix", models.CharField(max_length=10)),
                ("next_number", models.PositiveIntegerField(default=1)),
                ("padding", models.PositiveSmallIntegerField(default=4)),
            ],
        ),
        migrations.CreateModel(
            name="Voucher",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("voucher_no", models.CharField(max_length=32, unique=True)),
                ("voucher_type", models.CharField(choices=[("sales_invoice", "Sales Invoice"), ("purchase_invoice", "Purchase Invoice"), ("sales_return", "Sales Return"), ("purchase_return", "Purchase Return"), ("payment", "Payment"), ("receipt", "Receipt"), ("journal", "Journal"), ("opening_balance", "Opening Balance"), ("opening_stock", "Opening Stock")], max_length=20)),
                ("voucher_date", models.DateField()),
                ("reference", models.CharField(blank=True, default="", max_length=200)),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("discount_rate", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=7)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("narration", models.TextField(blank=True, default="")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("posted", "Posted")], default="posted", max_length=10)),
                ("payment_status", models.CharField(blank=True, choices=[("unpaid", "Unpaid"), ("partially_paid", "Partially paid"), ("paid", "Paid")], max_length=15, null=True)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("account", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="settlement_vouchers", to="ledger_core.account")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ("created_from_invoice", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="settlement_children", to="ledger_core.voucher")),
                ("party", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="vouchers", to="ledger_core.party")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["voucher_type", "voucher_date"], name="voucher_type_date_idx"),
                    models.Index(fields=["party", "voucher_type"], name="voucher_party_type_idx"),
                    models.Index(fields=["voucher_date", "id"], name="voucher_date_id_idx"),
                ],
                "constraints": [models.CheckConstraint(condition=models.Q(("discount_amount__gte", 0)), name="voucher_discount_non_negative")],
            },
        ),
        migrations.CreateModel(
            name="VoucherItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(blank=True, default="", max_length=400)),
                ("initial_quantity", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=18)),
                ("count", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=18)),
                ("deduction_per_unit", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=18)),
                ("final_quantity", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=18)),
                ("rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("discount_percent", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=7)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("tax_rate", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=7)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("remarks", models.CharField(blank=True, default="", max_length=400)),
                ("ledger_account", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="voucher_items", to="ledger_core.account")),
                ("product", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="voucher_items", to="ledger_core.product")),
                ("voucher", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="ledger_core.voucher")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("is_manual", models.BooleanField(default=False)),
                ("narration", models.CharField(blank=True, default="", max_length=400)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("account", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="journal_entries", to="ledger_core.account")),
                ("voucher", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="journal_entries", to="ledger_core.voucher")),
            ],
            options={
                "verbose_name_plural": "journal entries",
                "ordering": ["id"],
                "indexes": [models.Index(fields=["account", "voucher"], name="je_account_voucher_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("debit__gte", 0), ("credit__gte", 0)), name="je_non_negative_amounts"),
                    models.CheckConstraint(condition=models.Q(models.Q(("debit__gt", 0), ("credit__gt", 0)), _negated=True), name="je_not_both_sides"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StockMovement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("movement_type", models.CharField(choices=[("IN", "In"), ("OUT", "Out")], max_length=3)),
                ("quantity", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=18)),
                ("count", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=18)),
                ("rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="stock_movements", to="ledger_core.product")),
                ("voucher", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="stock_movements", to="ledger_core.voucher")),
            ],
            options={
                "ordering": ["id"],
                "indexes": [models.Index(fields=["product", "movement_type"], name="stock_product_type_idx")],
            },
        ),
        migrations.CreateModel(
            name="PaymentAllocation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("allocated_amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("allocation_date", models.DateField()),
                ("remarks", models.CharField(blank=True, default="", max_length=400)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("invoice_voucher", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="allocations_received", to="ledger_core.voucher")),
                ("party", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="allocations", to="ledger_core.party")),
                ("payment_voucher", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="allocations_made", to="ledger_core.voucher")),
            ],
            options={
                "ordering": ["id"],
                "constraints": [models.CheckConstraint(condition=models.Q(("allocated_amount__gt", 0)), name="allocation_amount_positive")],
            },
        ),
        migrations.CreateModel(
            name="OpeningBalance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("opening_debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("opening_credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("financial_year", models.PositiveSmallIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("account", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="opening_balances", to="ledger_core.account")),
                ("voucher", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="opening_balances", to="ledger_core.voucher")),
            ],
            options={
                "indexes": [models.Index(fields=["account", "financial_year"], name="ob_account_year_idx")],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(max_length=50)),
                ("object_type", models.CharField(max_length=100)),
                ("object_id", models.CharField(max_length=100)),
                ("changes", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["object_type", "object_id"], name="auditlog_object_idx"),
                    models.Index(fields=["created_at"], name="auditlog_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AccountBalanceSnapshot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("snapshot_date", models.DateField()),
                ("debit_balance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("credit_balance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("account", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="snapshots", to="ledger_core.account")),
            ],
            options={
                "indexes": [models.Index(fields=["snapshot_date"], name="snapshot_date_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("debit_balance__gte", 0), ("credit_balance__gte", 0)), name="ab_snap_non_negative_amounts"),
                    models.UniqueConstraint(fields=("account", "snapshot_date"), name="uq_account_snapshot_date"),
                ],
            },
        ),
    ]
