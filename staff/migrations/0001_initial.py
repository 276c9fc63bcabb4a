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
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("position", models.CharField(blank=True, max_length=128)),
                ("department", models.CharField(blank=True, max_length=128)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("stage", models.CharField(choices=[
                    ("interview", "Interview Scheduled"),
                    ("location_selected", "Location Selected"),
                    ("questionnaire_completed", "Questionnaire Completed"),
                    ("active", "Active Employee"),
                ], default="interview", max_length=32)),
                ("status", models.CharField(choices=[
                    ("pending_approval", "Pending approval"),
                    ("approved", "Approved"),
                    ("rejected", "Rejected"),
                    ("paused", "Paused"),
                    ("inactive", "Inactive"),
                ], default="pending_approval", max_length=32)),
                ("personal_info", models.JSONField(blank=True, default=dict)),
                ("questionnaire_responses", models.JSONField(blank=True, default=dict)),
                ("profile_data", models.JSONField(blank=True, default=dict)),
                ("assignments", models.JSONField(blank=True, default=dict)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("rejection_reason", models.TextField(blank=True)),
                ("first_shift_date", models.DateField(blank=True, null=True)),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="approved_employees", to=settings.AUTH_USER_MODEL)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="employee_profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ("-created_at",),
                "indexes": [models.Index(fields=["status", "stage"], name="employee_status_stage_idx")],
            },
        ),
    ]
