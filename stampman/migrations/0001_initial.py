# Generated migration for the stampman loyalty engine

import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Branch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("address", models.CharField(blank=True, max_length=200, verbose_name="address")),
                ("city", models.CharField(blank=True, max_length=100, verbose_name="city")),
                ("phone", models.CharField(blank=True, max_length=30, verbose_name="phone")),
                ("manager", models.CharField(blank=True, max_length=100, verbose_name="manager")),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "branch",
                "verbose_name_plural": "branches",
                "db_table": "stampman_branch",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="LoyaltyCard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("description", models.CharField(blank=True, max_length=200, verbose_name="description")),
                (
                    "total_stamps",
                    models.PositiveIntegerField(
                        help_text="Stamps needed to complete the card",
                        verbose_name="stamps required",
                    ),
                ),
                (
                    "reward",
                    models.CharField(
                        help_text="Reward text copied into minted coupons",
                        max_length=150,
                        verbose_name="reward",
                    ),
                ),
                ("category", models.CharField(blank=True, max_length=50, verbose_name="category")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "loyalty card",
                "verbose_name_plural": "loyalty cards",
                "db_table": "stampman_loyalty_card",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("total_stamps__gt", 0)),
                        name="stampman_card_total_stamps_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Reward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("description", models.CharField(blank=True, max_length=200, verbose_name="description")),
                ("points", models.PositiveIntegerField(verbose_name="points cost")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "reward",
                "verbose_name_plural": "rewards",
                "db_table": "stampman_reward",
                "ordering": ["points"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("points__gt", 0)),
                        name="stampman_reward_points_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SystemSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "amount_per_point",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Purchase amount that earns one point",
                        max_digits=14,
                        verbose_name="amount per point",
                    ),
                ),
                (
                    "amount_per_stamp",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Purchase amount that suggests one stamp",
                        max_digits=14,
                        verbose_name="amount per stamp",
                    ),
                ),
                ("points_expiration_days", models.PositiveIntegerField(verbose_name="points expiration (days)")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "system settings",
                "verbose_name_plural": "system settings",
                "db_table": "stampman_system_settings",
            },
        ),
        migrations.CreateModel(
            name="Promotion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100, verbose_name="title")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                (
                    "kind",
                    models.CharField(
                        choices=[("multiplier", "Multiplier"), ("bonus", "Bonus"), ("discount", "Discount")],
                        max_length=20,
                        verbose_name="kind",
                    ),
                ),
                ("value", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="value")),
                ("starts_at", models.DateTimeField(verbose_name="starts at")),
                ("ends_at", models.DateTimeField(verbose_name="ends at")),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "promotion",
                "verbose_name_plural": "promotions",
                "db_table": "stampman_promotion",
                "ordering": ["-starts_at"],
                "indexes": [
                    models.Index(fields=["status", "starts_at", "ends_at"], name="stampman_promo_window_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Member",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "code",
                    models.CharField(
                        help_text="Unique member code (e.g. MEM-001)",
                        max_length=50,
                        unique=True,
                        verbose_name="code",
                    ),
                ),
                ("name", models.CharField(max_length=150, verbose_name="name")),
                ("email", models.EmailField(blank=True, db_index=True, max_length=254, verbose_name="email")),
                (
                    "role",
                    models.CharField(
                        choices=[("user", "User"), ("admin", "Admin"), ("superadmin", "Super admin")],
                        default="user",
                        max_length=20,
                        verbose_name="role",
                    ),
                ),
                (
                    "points_balance",
                    models.IntegerField(
                        default=0,
                        help_text="Points available for redemption",
                        verbose_name="points balance",
                    ),
                ),
                (
                    "lifetime_points",
                    models.IntegerField(
                        default=0,
                        help_text="Total points ever earned (never decreases)",
                        verbose_name="lifetime points",
                    ),
                ),
                (
                    "tier",
                    models.CharField(
                        blank=True,
                        choices=[("bronze", "Bronze"), ("silver", "Silver"), ("gold", "Gold")],
                        max_length=20,
                        verbose_name="tier",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        help_text="Branch managed by this admin",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="staff",
                        to="stampman.branch",
                        verbose_name="branch",
                    ),
                ),
            ],
            options={
                "verbose_name": "member",
                "verbose_name_plural": "members",
                "db_table": "stampman_member",
                "ordering": ["code"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("points_balance__gte", 0)),
                        name="stampman_member_points_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Purchase",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="amount")),
                ("description", models.CharField(blank=True, max_length=200, verbose_name="description")),
                (
                    "receipt",
                    models.CharField(
                        blank=True,
                        help_text="Receipt or invoice number/URL, if provided",
                        max_length=200,
                        null=True,
                        verbose_name="receipt",
                    ),
                ),
                ("points", models.IntegerField(editable=False, verbose_name="points")),
                ("base_points", models.IntegerField(editable=False, verbose_name="base points")),
                (
                    "multiplier",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("1"),
                        editable=False,
                        max_digits=10,
                        verbose_name="multiplier",
                    ),
                ),
                ("bonus_points", models.IntegerField(default=0, editable=False, verbose_name="bonus points")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                        db_index=True,
                        default="pending",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                ("submitted_at", models.DateTimeField(verbose_name="submitted at")),
                ("approved_at", models.DateTimeField(blank=True, null=True, verbose_name="approved at")),
                ("decided_at", models.DateTimeField(blank=True, null=True, verbose_name="decided at")),
                ("decided_by", models.CharField(blank=True, max_length=150, verbose_name="decided by")),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="purchases",
                        to="stampman.branch",
                        verbose_name="branch",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchases",
                        to="stampman.member",
                        verbose_name="member",
                    ),
                ),
            ],
            options={
                "verbose_name": "purchase",
                "verbose_name_plural": "purchases",
                "db_table": "stampman_purchase",
                "ordering": ["-submitted_at"],
                "indexes": [
                    models.Index(fields=["member", "-submitted_at"], name="stampman_purchase_member_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StampCard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("stamps", models.PositiveIntegerField(default=0, verbose_name="stamps")),
                ("times_completed", models.PositiveIntegerField(default=0, verbose_name="times completed")),
                ("started_at", models.DateTimeField(auto_now_add=True, verbose_name="started at")),
                ("last_completed_at", models.DateTimeField(blank=True, null=True, verbose_name="last completed at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "card",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="member_cards",
                        to="stampman.loyaltycard",
                        verbose_name="card",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stamp_cards",
                        to="stampman.member",
                        verbose_name="member",
                    ),
                ),
            ],
            options={
                "verbose_name": "stamp card",
                "verbose_name_plural": "stamp cards",
                "db_table": "stampman_stamp_card",
                "constraints": [
                    models.UniqueConstraint(fields=("member", "card"), name="stampman_unique_member_card"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Coupon",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=64, unique=True, verbose_name="code")),
                ("name", models.CharField(max_length=200, verbose_name="name")),
                ("description", models.CharField(blank=True, max_length=255, verbose_name="description")),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("used", "Used"), ("expired", "Expired")],
                        default="active",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "card",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="coupons",
                        to="stampman.loyaltycard",
                        verbose_name="source card",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coupons",
                        to="stampman.member",
                        verbose_name="member",
                    ),
                ),
                (
                    "purchase",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="coupons",
                        to="stampman.purchase",
                        verbose_name="source purchase",
                    ),
                ),
            ],
            options={
                "verbose_name": "coupon",
                "verbose_name_plural": "coupons",
                "db_table": "stampman_coupon",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Redemption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reward_name", models.CharField(max_length=100, verbose_name="reward name")),
                ("points", models.PositiveIntegerField(editable=False, verbose_name="points")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                        db_index=True,
                        default="pending",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                ("requested_at", models.DateTimeField(verbose_name="requested at")),
                ("decided_at", models.DateTimeField(blank=True, null=True, verbose_name="decided at")),
                ("decided_by", models.CharField(blank=True, max_length=150, verbose_name="decided by")),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="redemptions",
                        to="stampman.member",
                        verbose_name="member",
                    ),
                ),
                (
                    "reward",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="redemptions",
                        to="stampman.reward",
                        verbose_name="reward",
                    ),
                ),
            ],
            options={
                "verbose_name": "redemption",
                "verbose_name_plural": "redemptions",
                "db_table": "stampman_redemption",
                "ordering": ["-requested_at"],
            },
        ),
        migrations.CreateModel(
            name="PointTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "kind",
                    models.CharField(
                        choices=[("earn", "Earn"), ("redeem", "Redeem"), ("refund", "Refund"), ("adjust", "Adjust")],
                        max_length=10,
                        verbose_name="kind",
                    ),
                ),
                (
                    "points",
                    models.IntegerField(
                        help_text="Positive for earn/refund, negative for redeem",
                        verbose_name="points",
                    ),
                ),
                ("balance_after", models.IntegerField(verbose_name="balance after")),
                ("description", models.CharField(max_length=200, verbose_name="description")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="Source record (e.g. purchase:123)",
                        max_length=100,
                        verbose_name="reference",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("created_by", models.CharField(blank=True, max_length=150, verbose_name="created by")),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to="stampman.member",
                        verbose_name="member",
                    ),
                ),
            ],
            options={
                "verbose_name": "point transaction",
                "verbose_name_plural": "point transactions",
                "db_table": "stampman_point_transaction",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["member", "-created_at"], name="stampman_ptx_member_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("reference", ""), _negated=True),
                        fields=("kind", "reference"),
                        name="stampman_unique_kind_reference",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("purchase_approved", "Purchase approved"),
                            ("reward_earned", "Purchase approved, reward earned"),
                            ("purchase_rejected", "Purchase rejected"),
                            ("broadcast", "Broadcast"),
                            ("message", "Message"),
                        ],
                        default="message",
                        max_length=20,
                        verbose_name="kind",
                    ),
                ),
                ("message", models.TextField(verbose_name="message")),
                ("sender", models.CharField(max_length=150, verbose_name="sender")),
                ("created_at", models.DateTimeField(db_index=True, verbose_name="created at")),
                (
                    "member",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to="stampman.member",
                        verbose_name="member",
                    ),
                ),
            ],
            options={
                "verbose_name": "notification",
                "verbose_name_plural": "notifications",
                "db_table": "stampman_notification",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
