import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("staff", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ReviewSchedule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_shift_date", models.DateField()),
                ("review_type", models.CharField(choices=[("one_week", "1 Week Review"), ("one_month", "1 Month Review"), ("quarterly", "Quarterly Review")], max_length=32)),
                ("scheduled_date", models.DateField()),
                ("completed", models.BooleanField(default=False)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("employee", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="review_schedules", to="staff.employee")),
            ],
            options={
                "ordering": ("scheduled_date", "pk"),
                "indexes": [models.Index(fields=["completed", "scheduled_date"], name="review_pending_idx")],
                "constraints": [models.UniqueConstraint(fields=("employee", "review_type", "scheduled_date"), name="review_schedule_unique")],
            },
        ),
    ]
