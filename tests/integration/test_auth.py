"""
Integration tests for authentication endpoints.
Tests signup, the login paths, Google sign-in and profile endpoints.
"""
import pytest
from httpx import AsyncClient

PASSWORD = "Test123!@#"


@pytest.mark.integration
@pytest.mark.asyncio
class TestSignupEndpoint:
    """Test the attendee signup endpoint."""
    
    async def test_signup_success(self, client: AsyncClient):
        """Test that signup returns a session for a new attendee."""
        response = await client.post(
            "/api/v1/auth/signup",
            json={"name": "New User", "email": "newuser@example.com", "password": PASSWORD}
        )
        
        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["email"] == "newuser@example.com"
        assert data["user"]["role"] == "USER"
        assert data["user"]["blocked"] is False
        assert "hashed_password" not in data["user"]
    
    async def test_signup_weak_password(self, client: AsyncClient):
        """Test that signup with a weak password fails."""
        response = await client.post(
            "/api/v1/auth/signup",
            json={"name": "Weak", "email": "weak@example.com", "password": "weak"}
        )
        
        assert response.status_code == 400
        assert "password" in response.json()["detail"].lower()
    
    async def test_signup_duplicate_email(self, client: AsyncClient, attendee):
        """Test that signup with an existing email fails."""
        response = await client.post(
            "/api/v1/auth/signup",
            json={"name": "Copy", "email": attendee.email, "password": PASSWORD}
        )
        
        assert response.status_code == 400
        assert "already registered" in response.json()["detail"].lower()
    
    async def test_signup_invalid_email(self, client: AsyncClient):
        """Test that a malformed email is rejected by validation."""
        response = await client.post(
            "/api/v1/auth/signup",
            json={"name": "Bad", "email": "not-an-email", "password": PASSWORD}
        )
        
        assert response.status_code == 422


@pytest.mark.integration
@pytest.mark.asyncio
class TestLoginEndpoints:
    """Test the password and administrative login endpoints."""
    
    async def test_login_success(self, client: AsyncClient, attendee):
        """Test successful login with valid credentials."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": attendee.email, "password": PASSWORD}
        )
        
        assert response.status_code == 200
        assert response.json()["user"]["uid"] == attendee.uid
    
    async def test_login_wrong_password(self, client: AsyncClient, attendee):
        """Test login with incorrect password fails."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": attendee.email, "password": "Wrong123!@#"}
        )
        
        assert response.status_code == 401
        assert response.json()["detail"] == "Incorrect credentials"
    
    async def test_login_unknown_user(self, client: AsyncClient):
        """Test login with an unregistered email fails."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": PASSWORD}
        )
        
        assert response.status_code == 401
    
    async def test_pending_organizer_is_forbidden(self, client: AsyncClient, pending_organizer):
        """Test that an unapproved organizer gets 403."""
        response = await client.post(
            "/api/v1/auth/institution/login",
            json={"email": "organizer@example.com", "password": PASSWORD}
        )
        
        assert response.status_code == 403
        assert response.json()["detail"] == "Account Blocked/Deboarded by Super Admin"
    
    async def test_approved_organizer_logs_in(self, client: AsyncClient, organizer):
        """Test that an approved organizer can log in."""
        response = await client.post(
            "/api/v1/auth/institution/login",
            json={"email": "organizer@example.com", "password": PASSWORD}
        )
        
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "INSTITUTION"
    
    async def test_attendee_refused_at_institution_login(self, client: AsyncClient, attendee):
        """Test that attendees cannot use the organizer login."""
        response = await client.post(
            "/api/v1/auth/institution/login",
            json={"email": attendee.email, "password": PASSWORD}
        )
        
        assert response.status_code == 403
        assert response.json()["detail"] == "Not an authorized institution account."
    
    async def test_super_admin_login(self, client: AsyncClient, admin_password):
        """Test administrative login with the configured credential."""
        response = await client.post(
            "/api/v1/auth/super-admin/login",
            json={"password": admin_password}
        )
        
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "SUPER_ADMIN"
    
    async def test_super_admin_wrong_password(self, client: AsyncClient, admin_password):
        """Test that a wrong administrative credential fails."""
        response = await client.post(
            "/api/v1/auth/super-admin/login",
            json={"password": "admin"}
        )
        
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid Root Password"


@pytest.mark.integration
@pytest.mark.asyncio
class TestGoogleEndpoints:
    """Test Google sign-in and onboarding endpoints."""
    
    async def test_unknown_account_is_new_user(self, client: AsyncClient):
        """Test that an unknown Google account must onboard."""
        response = await client.post("/api/v1/auth/google", json={"id_token": "google:g-77"})
        
        assert response.status_code == 200
        data = response.json()
        assert data["is_new_user"] is True
        assert data["access_token"] is None
        assert data["google_user"]["email"] == "g-77@gmail.com"
    
    async def test_rejected_token(self, client: AsyncClient):
        """Test that a rejected Google token gives 401."""
        response = await client.post("/api/v1/auth/google", json={"id_token": "forged"})
        
        assert response.status_code == 401
        assert response.json()["detail"] == "Google sign-in failed. Please try again."
    
    async def test_register_attendee_then_login(self, client: AsyncClient):
        """Test Google onboarding as attendee followed by login."""
        register = await client.post(
            "/api/v1/auth/google/register",
            json={"id_token": "google:g-77", "choice": "ATTENDEE", "name": "Google Student"}
        )
        login = await client.post("/api/v1/auth/google", json={"id_token": "google:g-77"})
        
        assert register.status_code == 201
        assert register.json()["access_token"]
        assert login.status_code == 200
        assert login.json()["user"]["uid"] == "g-77"
    
    async def test_register_organizer_gets_no_token(self, client: AsyncClient):
        """Test that a Google organizer waits for approval."""
        register = await client.post(
            "/api/v1/auth/google/register",
            json={"id_token": "google:g-88", "choice": "ORGANIZER", "name": "Film Club", "phone": "555-0123"}
        )
        login = await client.post("/api/v1/auth/google", json={"id_token": "google:g-88"})
        
        assert register.status_code == 201
        assert register.json()["access_token"] is None
        assert register.json()["user"]["blocked"] is True
        assert login.status_code == 403
    
    async def test_register_organizer_without_phone(self, client: AsyncClient):
        """Test that Google organizers must give a phone number."""
        response = await client.post(
            "/api/v1/auth/google/register",
            json={"id_token": "google:g-88", "choice": "ORGANIZER", "name": "Film Club"}
        )
        
        assert response.status_code == 400


@pytest.mark.integration
@pytest.mark.asyncio
class TestProfileEndpoints:
    """Test reading and editing the caller's profile."""
    
    async def test_get_me(self, client: AsyncClient, attendee, auth_headers):
        """Test getting current user info with valid token."""
        response = await client.get("/api/v1/auth/me", headers=auth_headers(attendee))
        
        assert response.status_code == 200
        assert response.json()["uid"] == attendee.uid
    
    async def test_get_me_without_token(self, client: AsyncClient):
        """Test getting current user without token fails."""
        response = await client.get("/api/v1/auth/me")
        
        assert response.status_code in (401, 403)
    
    async def test_get_me_invalid_token(self, client: AsyncClient):
        """Test getting current user with invalid token fails."""
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer invalid.token"})
        
        assert response.status_code == 401
    
    async def test_blocked_account_token_is_refused(self, client: AsyncClient, attendee, onboarding, auth_headers):
        """Test that blocking takes effect on an issued token."""
        headers = auth_headers(attendee)
        await onboarding.admin_toggle_block_user(attendee.uid)
        
        response = await client.get("/api/v1/auth/me", headers=headers)
        
        assert response.status_code == 403
    
    async def test_update_me(self, client: AsyncClient, attendee, auth_headers):
        """Test that PATCH /me edits the profile but not role or block state."""
        response = await client.patch(
            "/api/v1/auth/me",
            json={"bio": "Hackathon regular", "blocked": False, "role": "SUPER_ADMIN"},
            headers=auth_headers(attendee)
        )
        
        assert response.status_code == 200
        data = response.json()
        assert data["bio"] == "Hackathon regular"
        assert data["role"] == "USER"
    
    async def test_update_me_clears_bio(self, client: AsyncClient, attendee, auth_headers):
        """Test that PATCH /me with null bio and phone clears them."""
        headers = auth_headers(attendee)
        await client.patch("/api/v1/auth/me", json={"bio": "Hackathon regular"}, headers=headers)
        
        response = await client.patch("/api/v1/auth/me", json={"bio": None, "phone": None}, headers=headers)
        
        assert response.status_code == 200
        assert response.json()["bio"] is None
        assert response.json()["phone"] is None
        assert response.json()["name"] == attendee.name
    
    async def test_update_me_null_name_rejected(self, client: AsyncClient, attendee, auth_headers):
        """Test that PATCH /me cannot clear the name."""
        response = await client.patch("/api/v1/auth/me", json={"name": None}, headers=auth_headers(attendee))
        
        assert response.status_code == 422
