import datetime
import uuid

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.models import Aircraft, CrewMember, Flight, FlightRole

pytestmark = pytest.mark.django_db


# ---------------------------------------------------------------------------
# Aircraft
# ---------------------------------------------------------------------------

class TestAircraft:
    def test_uuid_pk_generated(self, owner_user):
        ac = Aircraft.objects.create(owner=owner_user, registration='D-EFGH')
        assert isinstance(ac.id, uuid.UUID)

    def test_defaults(self, owner_user):
        ac = Aircraft.objects.create(owner=owner_user, registration='D-EFGH')
        assert ac.deleted is False
        assert ac.deleted_at is None
        assert ac.tailwheel is False
        assert ac.created_at is not None

    def test_str_format(self, aircraft):
        assert str(aircraft) == 'D-EABC - C172 Skyhawk'

    def test_live_registration_unique_per_owner(self, owner_user, aircraft):
        with pytest.raises(IntegrityError), transaction.atomic():
            Aircraft.objects.create(owner=owner_user, registration='D-EABC')

    def test_same_registration_for_other_owner(self, other_user, aircraft):
        Aircraft.objects.create(owner=other_user, registration='D-EABC')
        assert Aircraft.objects.filter(registration='D-EABC').count() == 2

    def test_soft_deleted_frees_registration(self, owner_user, aircraft):
        aircraft.deleted = True
        aircraft.deleted_at = timezone.now()
        aircraft.save()
        Aircraft.objects.create(owner=owner_user, registration='D-EABC')
        assert Aircraft.objects.filter(owner=owner_user, registration='D-EABC').count() == 2

    def test_flights_keep_row_when_aircraft_removed(self, aircraft, flight):
        aircraft.delete()
        flight.refresh_from_db()
        assert flight.aircraft is None


# ---------------------------------------------------------------------------
# Crew members
# ---------------------------------------------------------------------------

class TestCrewMember:
    def test_str_is_name(self, crew_member):
        assert str(crew_member) == 'Jane Doe'

    def test_live_name_unique_per_owner(self, owner_user, crew_member):
        with pytest.raises(IntegrityError), transaction.atomic():
            CrewMember.objects.create(owner=owner_user, name='Jane Doe')

    def test_name_is_case_sensitive(self, owner_user, crew_member):
        CrewMember.objects.create(owner=owner_user, name='jane doe')
        assert CrewMember.objects.filter(owner=owner_user).count() == 2


# ---------------------------------------------------------------------------
# Flights
# ---------------------------------------------------------------------------

class TestFlight:
    def test_str_format(self, flight):
        assert str(flight) == '2024-05-01 D-EABC EDDF-EDDM'

    def test_ordering_newest_first(self, owner_user, flight):
        later = Flight.objects.create(
            owner=owner_user, flight_date=datetime.date(2024, 6, 1), registration='D-EABC',
        )
        assert list(Flight.objects.all()) == [later, flight]

    def test_natural_key_unique_while_live(self, owner_user, flight):
        with pytest.raises(IntegrityError), transaction.atomic():
            Flight.objects.create(
                owner=owner_user,
                flight_date=datetime.date(2024, 5, 1),
                registration='D-EABC',
                departure_airport='EDDF',
                arrival_airport='EDDM',
            )

    def test_different_route_same_day(self, owner_user, flight):
        Flight.objects.create(
            owner=owner_user,
            flight_date=datetime.date(2024, 5, 1),
            registration='D-EABC',
            departure_airport='EDDM',
            arrival_airport='EDDF',
        )
        assert Flight.objects.filter(owner=owner_user).count() == 2

    def test_flight_date_required(self, owner_user):
        with pytest.raises(IntegrityError), transaction.atomic():
            Flight.objects.create(owner=owner_user, flight_date=None, registration='D-EABC')


# ---------------------------------------------------------------------------
# Flight roles
# ---------------------------------------------------------------------------

class TestFlightRole:
    def test_str_format(self, flight_role):
        assert str(flight_role) == 'Jane Doe - PIC on 2024-05-01 D-EABC EDDF-EDDM'

    def test_reverse_relations(self, flight, crew_member, flight_role):
        assert list(flight.roles.all()) == [flight_role]
        assert list(crew_member.flight_roles.all()) == [flight_role]

    def test_duplicate_live_role_rejected(self, owner_user, flight, crew_member, flight_role):
        with pytest.raises(IntegrityError), transaction.atomic():
            FlightRole.objects.create(owner=owner_user, flight=flight, crew_member=crew_member, role_name='PIC')

    def test_deleted_with_flight(self, flight, flight_role):
        flight.delete()
        assert not FlightRole.objects.exists()
