# Generated migration for promotion value checks and NotificationRead

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("stampman", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="promotion",
            constraint=models.CheckConstraint(
                condition=models.Q(("kind", "multiplier"), _negated=True) | models.Q(("value__gt", 0)),
                name="stampman_promo_multiplier_positive",
            ),
        ),
        migrations.AddConstraint(
            model_name="promotion",
            constraint=models.CheckConstraint(
                condition=models.Q(("kind", "bonus"), _negated=True) | models.Q(("value__gte", 0)),
                name="stampman_promo_bonus_non_negative",
            ),
        ),
        migrations.CreateModel(
            name="NotificationRead",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("read_at", models.DateTimeField(verbose_name="read at")),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notification_reads",
                        to="stampman.member",
                        verbose_name="member",
                    ),
                ),
                (
                    "notification",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reads",
                        to="stampman.notification",
                        verbose_name="notification",
                    ),
                ),
            ],
            options={
                "verbose_name": "notification read",
                "verbose_name_plural": "notification reads",
                "db_table": "stampman_notification_read",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("member", "notification"),
                        name="stampman_unique_notification_read",
                    ),
                ],
            },
        ),
    ]
