import datetime

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from core.models import Aircraft, CrewMember, Flight, FlightRole

User = get_user_model()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        username='admin', password='pw', email='admin@test.com'
    )


@pytest.fixture
def owner_user(db):
    return User.objects.create_user(username='owner', password='pw', email='owner@test.com')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username='other', password='pw')


# ---------------------------------------------------------------------------
# API clients
# ---------------------------------------------------------------------------

@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def owner_client(owner_user):
    client = APIClient()
    client.force_authenticate(user=owner_user)
    return client


@pytest.fixture
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


# ---------------------------------------------------------------------------
# Live logbook records
# ---------------------------------------------------------------------------

@pytest.fixture
def aircraft(owner_user):
    return Aircraft.objects.create(
        owner=owner_user,
        registration='D-EABC',
        type='C172',
        model='Skyhawk',
        aircraft_class='SEP',
        default_condition='VFR',
    )


@pytest.fixture
def crew_member(owner_user):
    return CrewMember.objects.create(
        owner=owner_user,
        name='Jane Doe',
        email='jane@example.com',
    )


@pytest.fixture
def flight(owner_user, aircraft):
    return Flight.objects.create(
        owner=owner_user,
        flight_date=datetime.date(2024, 5, 1),
        aircraft=aircraft,
        registration='D-EABC',
        aircraft_type='C172',
        departure_airport='EDDF',
        arrival_airport='EDDM',
        block_time='1.50',
        landings_day=1,
    )


@pytest.fixture
def flight_role(owner_user, flight, crew_member):
    return FlightRole.objects.create(
        owner=owner_user,
        flight=flight,
        crew_member=crew_member,
        role_name='PIC',
    )
