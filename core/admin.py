from django.contrib import admin

from .models import Aircraft, CrewMember, Flight, FlightRole


class FlightRoleInline(admin.TabularInline):
    model = FlightRole
    extra = 0
    raw_id_fields = ['crew_member']


@admin.register(Aircraft)
class AircraftAdmin(admin.ModelAdmin):
    list_display = ('registration', 'type', 'model', 'aircraft_class', 'owner', 'deleted')
    list_filter = ['deleted', 'default_condition']
    search_fields = ['registration', 'type', 'model']
    readonly_fields = ['id', 'created_at', 'updated_at']


@admin.register(CrewMember)
class CrewMemberAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'license_number', 'owner', 'deleted')
    list_filter = ['deleted']
    search_fields = ['name', 'email']
    readonly_fields = ['id', 'created_at', 'updated_at']


@admin.register(Flight)
class FlightAdmin(admin.ModelAdmin):
    inlines = [FlightRoleInline]
    list_display = ('flight_date', 'registration', 'departure_airport', 'arrival_airport', 'block_time', 'owner')
    list_filter = ['deleted']
    search_fields = ['registration', 'departure_airport', 'arrival_airport', 'flight_number']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['aircraft']
