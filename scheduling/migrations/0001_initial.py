import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("staff", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Shift",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("department", models.CharField(choices=[("BOH", "Back of house"), ("FOH", "Front of house")], max_length=8)),
                ("role", models.CharField(max_length=128)),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("shift_type", models.CharField(blank=True, max_length=64)),
                ("requirements", models.JSONField(blank=True, default=list)),
                ("status", models.CharField(choices=[("active", "Active"), ("cancelled", "Cancelled")], default="active", max_length=16)),
                ("created_from", models.CharField(choices=[("manual", "Manual"), ("open_shift", "Open shift claim"), ("template", "Template")], default="manual", max_length=16)),
                ("is_conflict", models.BooleanField(default=False)),
                ("published", models.BooleanField(default=False)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("employee", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="shifts", to="staff.employee")),
                ("published_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="published_shifts", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ("date", "start_time"),
                "indexes": [
                    models.Index(fields=["employee", "date", "status"], name="shift_employee_date_idx"),
                    models.Index(fields=["date", "department"], name="shift_date_department_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AvailabilityRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("type", models.CharField(choices=[("recurring", "Recurring"), ("temporary", "Temporary")], max_length=16)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("declined", "Declined")], default="pending", max_length=16)),
                ("effective_from", models.DateField(blank=True, null=True)),
                ("effective_to", models.DateField(blank=True, null=True)),
                ("availability_data", models.JSONField(blank=True, default=dict, help_text="Per-weekday availability keyed by lower-case day name.")),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("admin_notes", models.TextField(blank=True)),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reviewed_availability_requests", to=settings.AUTH_USER_MODEL)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="availability_requests", to="staff.employee")),
            ],
            options={
                "ordering": ("-created_at",),
                "indexes": [
                    models.Index(fields=["employee", "status"], name="availability_employee_idx"),
                    models.Index(fields=["type", "status", "effective_to"], name="availability_expiry_idx"),
                ],
            },
        ),
    ]
