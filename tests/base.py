import unittest

import httpx
from sqlalchemy import func, select

from store_api.auth.tokens import create_access_token
from store_api.database import async_session_maker, engine, metadata
from store_api.main import app
from store_api.users.models import AccessLevel
from store_api.users.service import add_user_with_profile


class ApiTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh schema per test and an HTTP client bound to the app."""

    async def asyncSetUp(self):
        async with engine.begin() as conn:
            await conn.run_sync(metadata.drop_all)
            await conn.run_sync(metadata.create_all)
        self.client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")

    async def asyncTearDown(self):
        await self.client.aclose()
        await engine.dispose()

    async def create_user(self, name, access_level=AccessLevel.REGULAR, password="secret"):
        async with async_session_maker() as session:
            user = await add_user_with_profile(session, name, password, access_level)
            await session.commit()
            return user

    def auth(self, user):
        return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}

    async def count(self, model, *conditions):
        async with async_session_maker() as session:
            stmt = select(func.count()).select_from(model)
            if conditions:
                stmt = stmt.where(*conditions)
            result = await session.execute(stmt)
            return result.scalar_one()

    async def fetch(self, model, ident):
        async with async_session_maker() as session:
            return await session.get(model, ident)

    async def post_store(self, user, **fields):
        body = {"name": "Acme", "category": 0, **fields}
        response = await self.client.post("/stores", json=body, headers=self.auth(user))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    async def post_employee(self, user, **fields):
        body = {"firstName": "Jo", "lastName": "Doe", "gender": 1, "salary": 3000, **fields}
        response = await self.client.post("/storeemployees", json=body, headers=self.auth(user))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    async def post_role(self, user, **fields):
        body = {"name": "Cashier", "description": "Handles the till", "roleLevel": 1, **fields}
        response = await self.client.post("/storeemployeeroles", json=body, headers=self.auth(user))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    async def post_shift(self, user, store_id, employee_id, **fields):
        body = {
            "storeId": store_id,
            "storeEmployeeId": employee_id,
            "startDate": "2024-05-01T08:00:00",
            "endDate": "2024-05-01T16:00:00",
            **fields,
        }
        return await self.client.post("/storeshifts", json=body, headers=self.auth(user))
