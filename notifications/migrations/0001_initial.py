import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("type", models.CharField(choices=[
                    ("new_signup", "New signup"),
                    ("onboarding_complete", "Onboarding complete"),
                    ("availability_request", "Availability request"),
                    ("availability_status_update", "Availability status update"),
                    ("performance_review_overdue", "Performance review overdue"),
                    ("performance_review_due_soon", "Performance review due soon"),
                    ("shift_claimed", "Shift claimed"),
                    ("generic", "Generic"),
                ], default="generic", max_length=64)),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField(blank=True)),
                ("recipient_type", models.CharField(choices=[("admin", "Admin"), ("employee", "Employee"), ("customer", "Customer")], default="admin", max_length=16)),
                ("recipient_id", models.PositiveBigIntegerField(blank=True, help_text="User id of a single recipient; empty addresses every recipient of the type.", null=True)),
                ("priority", models.CharField(choices=[("high", "High"), ("medium", "Medium"), ("low", "Low")], default="medium", max_length=8)),
                ("data", models.JSONField(blank=True, default=dict, help_text="Arbitrary structured data for client use.")),
                ("is_read", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ("-created_at",),
            },
        ),
        migrations.AddIndex(
            model_name="notification",
            index=models.Index(fields=("recipient_type", "is_read"), name="notification_unread_idx"),
        ),
        migrations.AddIndex(
            model_name="notification",
            index=models.Index(fields=("recipient_type", "recipient_id"), name="notification_recipient_idx"),
        ),
        migrations.AddIndex(
            model_name="notification",
            index=models.Index(fields=("type", "created_at"), name="notification_type_idx"),
        ),
    ]
