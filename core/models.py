from django.conf import settings
from django.db import models
from django.db.models import Q

import uuid

FLIGHT_RULE_CONDITIONS = (
        ('VFR', 'VFR'),
        ('IFR', 'IFR'),
)


class OwnedRecord(models.Model):
    """Fields shared by every logbook record: owner, soft-delete flag and timestamps."""
    id = models.UUIDField(primary_key=True, blank=False, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+')
    deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Aircraft(OwnedRecord):
    registration = models.CharField(max_length=254, blank=False)
    type = models.CharField(max_length=254, blank=True)
    model = models.CharField(max_length=254, blank=True)
    aircraft_class = models.CharField(max_length=254, blank=True)
    default_condition = models.CharField(max_length=10, blank=True, choices=FLIGHT_RULE_CONDITIONS)
    complex_aircraft = models.BooleanField(default=False)
    high_performance = models.BooleanField(default=False)
    tailwheel = models.BooleanField(default=False)
    glass_panel = models.BooleanField(default=False)

    class Meta:
        ordering = ['registration']
        constraints = [
            models.UniqueConstraint(
                fields=['owner', 'registration'],
                condition=Q(deleted=False),
                name='unique_live_aircraft_registration',
            ),
        ]

    def __str__(self):
        return f"{self.registration} - {self.type} {self.model}"


class CrewMember(OwnedRecord):
    name = models.CharField(max_length=254, blank=False)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=64, blank=True)
    license_number = models.CharField(max_length=128, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['owner', 'name'],
                condition=Q(deleted=False),
                name='unique_live_crew_member_name',
            ),
        ]

    def __str__(self):
        return self.name


class Flight(OwnedRecord):
    flight_date = models.DateField()
    flight_number = models.CharField(max_length=32, blank=True)
    aircraft = models.ForeignKey(Aircraft, related_name='flights', on_delete=models.SET_NULL,
                                 blank=True, null=True)
    registration = models.CharField(max_length=254, blank=True)
    aircraft_type = models.CharField(max_length=254, blank=True)
    departure_airport = models.CharField(max_length=8, blank=True)
    arrival_airport = models.CharField(max_length=8, blank=True)
    off_block = models.DateTimeField(blank=True, null=True)
    takeoff = models.DateTimeField(blank=True, null=True)
    landing = models.DateTimeField(blank=True, null=True)
    on_block = models.DateTimeField(blank=True, null=True)
    # Durations are decimal hours
    block_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    pic_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    sic_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    multi_pilot_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    ifr_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    vfr_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    night_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    cross_country_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    dual_given_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    dual_received_time = models.DecimalField(max_digits=6, decimal_places=2, blank=True, null=True)
    landings_day = models.PositiveIntegerField(default=0)
    landings_night = models.PositiveIntegerField(default=0)
    remarks = models.TextField(blank=True)

    class Meta:
        ordering = ['-flight_date', '-off_block']
        constraints = [
            models.UniqueConstraint(
                fields=['owner', 'flight_date', 'registration', 'departure_airport', 'arrival_airport'],
                condition=Q(deleted=False),
                name='unique_live_flight',
            ),
        ]

    def __str__(self):
        return f"{self.flight_date} {self.registration} {self.departure_airport}-{self.arrival_airport}"


class FlightRole(OwnedRecord):
    flight = models.ForeignKey(Flight, related_name='roles', on_delete=models.CASCADE)
    crew_member = models.ForeignKey(CrewMember, related_name='flight_roles', on_delete=models.CASCADE)
    role_name = models.CharField(max_length=64)

    class Meta:
        ordering = ['role_name', 'created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['flight', 'crew_member', 'role_name'],
                condition=Q(deleted=False),
                name='unique_live_flight_role',
            ),
        ]

    def __str__(self):
        return f"{self.crew_member.name} - {self.role_name} on {self.flight}"
