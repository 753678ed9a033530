import uuid

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
            name='Aircraft',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('deleted', models.BooleanField(default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('registration', models.CharField(max_length=254)),
                ('type', models.CharField(blank=True, max_length=254)),
                ('model', models.CharField(blank=True, max_length=254)),
                ('aircraft_class', models.CharField(blank=True, max_length=254)),
                ('default_condition', models.CharField(blank=True, choices=[('VFR', 'VFR'), ('IFR', 'IFR')], max_length=10)),
                ('complex_aircraft', models.BooleanField(default=False)),
                ('high_performance', models.BooleanField(default=False)),
                ('tailwheel', models.BooleanField(default=False)),
                ('glass_panel', models.BooleanField(default=False)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['registration'],
            },
        ),
        migrations.CreateModel(
            name='CrewMember',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('deleted', models.BooleanField(default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=254)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=64)),
                ('license_number', models.CharField(blank=True, max_length=128)),
                ('notes', models.TextField(blank=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Flight',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('deleted', models.BooleanField(default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('flight_date', models.DateField()),
                ('flight_number', models.CharField(blank=True, max_length=32)),
                ('registration', models.CharField(blank=True, max_length=254)),
                ('aircraft_type', models.CharField(blank=True, max_length=254)),
                ('departure_airport', models.CharField(blank=True, max_length=8)),
                ('arrival_airport', models.CharField(blank=True, max_length=8)),
                ('off_block', models.DateTimeField(blank=True, null=True)),
                ('takeoff', models.DateTimeField(blank=True, null=True)),
                ('landing', models.DateTimeField(blank=True, null=True)),
                ('on_block', models.DateTimeField(blank=True, null=True)),
                ('block_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('pic_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('sic_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('multi_pilot_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('ifr_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('vfr_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('night_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('cross_country_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('dual_given_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('dual_received_time', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('landings_day', models.PositiveIntegerField(default=0)),
                ('landings_night', models.PositiveIntegerField(default=0)),
                ('remarks', models.TextField(blank=True)),
                ('aircraft', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='flights', to='core.aircraft')),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-flight_date', '-off_block'],
            },
        ),
        migrations.CreateModel(
            name='FlightRole',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('deleted', models.BooleanField(default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('role_name', models.CharField(max_length=64)),
                ('crew_member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='flight_roles', to='core.crewmember')),
                ('flight', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='roles', to='core.flight')),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['role_name', 'created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='aircraft',
            constraint=models.UniqueConstraint(condition=models.Q(('deleted', False)), fields=('owner', 'registration'), name='unique_live_aircraft_registration'),
        ),
        migrations.AddConstraint(
            model_name='crewmember',
            constraint=models.UniqueConstraint(condition=models.Q(('deleted', False)), fields=('owner', 'name'), name='unique_live_crew_member_name'),
        ),
        migrations.AddConstraint(
            model_name='flight',
            constraint=models.UniqueConstraint(condition=models.Q(('deleted', False)), fields=('owner', 'flight_date', 'registration', 'departure_airport', 'arrival_airport'), name='unique_live_flight'),
        ),
        migrations.AddConstraint(
            model_name='flightrole',
            constraint=models.UniqueConstraint(condition=models.Q(('deleted', False)), fields=('flight', 'crew_member', 'role_name'), name='unique_live_flight_role'),
        ),
    ]
