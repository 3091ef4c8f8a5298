"""Professional profiles and discovery."""

import pytest

from app.exceptions import AuthorizationError, ConflictError
from app.models import ServiceType, UserRole
from app.schemas.professional import ProfessionalCreate, ProfessionalFilters
from app.services.professional_service import ProfessionalService

from conftest import auth_headers, ctx, make_professional, make_user

PROFILE = {
    "service_type": "Salon",
    "specialization": "Hair colouring",
    "location": "Bandra, Mumbai",
    "bio": "Ten years behind the chair",
    "working_hours": {"start": "10:00", "end": "19:30", "days": ["Tuesday", "Saturday"]},
}


class TestProfessionalService:
    async def test_professional_creates_profile(self, db_session, pro_user):
        service = ProfessionalService(db_session)

        professional = await service.create_professional(ctx(pro_user), ProfessionalCreate(**PROFILE))

        assert professional.user_id == pro_user.id
        assert professional.service_type == ServiceType.SALON
        assert professional.is_active is True
        assert professional.total_reviews == 0
        assert professional.working_hours["days"] == ["Tuesday", "Saturday"]
        assert professional.user.email == pro_user.email

    async def test_customer_cannot_create_profile(self, db_session, customer):
        service = ProfessionalService(db_session)

        with pytest.raises(AuthorizationError, match="Only professionals"):
            await service.create_professional(ctx(customer), ProfessionalCreate(**PROFILE))

    async def test_admin_can_create_profile(self, db_session, admin):
        service = ProfessionalService(db_session)

        professional = await service.create_professional(ctx(admin), ProfessionalCreate(**PROFILE))

        assert professional.user_id == admin.id

    async def test_one_profile_per_user(self, db_session, pro_user, professional):
        service = ProfessionalService(db_session)

        with pytest.raises(ConflictError, match="already exists"):
            await service.create_professional(ctx(pro_user), ProfessionalCreate(**PROFILE))

    def test_working_hours_validation(self):
        bad = dict(PROFILE, working_hours={"start": "25:00", "end": "18:00", "days": ["Monday"]})
        with pytest.raises(ValueError):
            ProfessionalCreate(**bad)

        no_days = dict(PROFILE, working_hours={"start": "09:00", "end": "18:00", "days": []})
        with pytest.raises(ValueError):
            ProfessionalCreate(**no_days)

    async def test_listing_order_and_filters(self, db_session):
        users = [
            await make_user(db_session, f"pro{i}@example.com", UserRole.PROFESSIONAL) for i in range(5)
        ]
        low = await make_professional(db_session, users[0], rating=3.5, total_reviews=40)
        top = await make_professional(db_session, users[1], rating=4.8, total_reviews=10)
        tied = await make_professional(db_session, users[2], rating=4.8, total_reviews=90)
        unrated = await make_professional(db_session, users[3], rating=None)
        await make_professional(db_session, users[4], rating=5.0, is_active=False)
        service = ProfessionalService(db_session)

        professionals, total = await service.get_professionals(ProfessionalFilters())

        assert total == 4
        assert [p.id for p in professionals] == [tied.id, top.id, low.id, unrated.id]

        inactive, total = await service.get_professionals(ProfessionalFilters(is_active=False))
        assert total == 1

    async def test_location_filter_is_case_insensitive(self, db_session):
        a = await make_user(db_session, "a@example.com", UserRole.PROFESSIONAL)
        b = await make_user(db_session, "b@example.com", UserRole.PROFESSIONAL)
        pune = await make_professional(db_session, a, location="Koregaon Park, Pune")
        await make_professional(db_session, b, location="Mumbai", service_type=ServiceType.GYM)
        service = ProfessionalService(db_session)

        found, total = await service.get_professionals(ProfessionalFilters(location="PUNE"))
        assert total == 1
        assert found[0].id == pune.id

        gyms, total = await service.get_professionals(ProfessionalFilters(service_type=ServiceType.GYM))
        assert total == 1
        assert gyms[0].service_type == ServiceType.GYM


class TestProfessionalsApi:
    async def test_create_and_fetch(self, client, db_session):
        user = await make_user(db_session, "stylist@example.com", UserRole.PROFESSIONAL, name="Meera")
        await db_session.commit()

        response = await client.post("/api/professionals/", json=PROFILE, headers=auth_headers(user))
        assert response.status_code == 201
        professional_id = response.json()["id"]

        response = await client.get(f"/api/professionals/{professional_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["service_type"] == "Salon"
        assert data["user"]["name"] == "Meera"
        assert data["working_hours"]["start"] == "10:00"

    async def test_list_is_public(self, client, seeded):
        response = await client.get("/api/professionals/", params={"location": "mum"})

        assert response.status_code == 200
        data = response.json()
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}
        assert data["professionals"][0]["id"] == seeded["professional"].id

    async def test_unknown_professional(self, client):
        response = await client.get("/api/professionals/123")

        assert response.status_code == 404

    async def test_admin_deactivates(self, client, seeded):
        professional_id = seeded["professional"].id

        response = await client.patch(
            f"/api/admin/professionals/{professional_id}",
            json={"is_active": False},
            headers=auth_headers(seeded["customer"]),
        )
        assert response.status_code == 403

        response = await client.patch(
            f"/api/admin/professionals/{professional_id}",
            json={"is_active": False},
            headers=auth_headers(seeded["admin"]),
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        response = await client.get("/api/professionals/")
        assert response.json()["pagination"]["total"] == 0
