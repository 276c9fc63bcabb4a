import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("scheduling", "0001_initial"),
        ("staff", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="TimeEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("date", models.DateField()),
                ("clock_in_time", models.TimeField()),
                ("clock_out_time", models.TimeField(blank=True, null=True)),
                ("total_hours", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("location_info", models.JSONField(blank=True, default=dict)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], default="approved", max_length=16)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="time_entries", to="staff.employee")),
            ],
            options={
                "verbose_name_plural": "time entries",
                "ordering": ("-date", "-clock_in_time"),
                "indexes": [
                    models.Index(fields=["employee", "date"], name="timeentry_employee_date_idx"),
                ],
            },
        ),
    ]
