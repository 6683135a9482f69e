from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from marketplace.tests.factories import CustomerFactory, ProductFactory, SellerFactory


class SignupViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("signup")

    def test_signup_success(self):
        response = self.client.post(
            self.url,
            {"name": "Ada", "email": " Ada@Example.com ", "password": "s3cret!", "role": "seller"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["message"], "User created successfully")
        self.assertEqual(response.data["user"]["email"], "ada@example.com")
        self.assertEqual(response.data["user"]["role"], "seller")
        self.assertNotIn("password", response.data["user"])
        self.assertIn("token", response.data)
        self.assertIn("refreshToken", response.data)

    def test_signup_defaults_to_customer(self):
        response = self.client.post(
            self.url, {"name": "Bo", "email": "bo@example.com", "password": "pw"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["role"], "customer")

    def test_signup_duplicate_email(self):
        CustomerFactory(email="bo@example.com")

        response = self.client.post(
            self.url, {"name": "Bo", "email": "bo@example.com", "password": "pw"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data, {"success": False, "message": "User already exists"})

    def test_signup_invalid_role(self):
        response = self.client.post(
            self.url, {"name": "Bo", "email": "bo@example.com", "password": "pw", "role": "admin"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Invalid role selected", response.data["message"])

    def test_signup_missing_fields(self):
        response = self.client.post(self.url, {"email": "bo@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])


class LoginViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("login")
        self.seller = SellerFactory(email="shop@example.com", password="pw")

    def test_login_success(self):
        response = self.client.post(self.url, {"email": "shop@example.com", "password": "pw"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], str(self.seller.id))
        token = AccessToken(response.data["token"])
        self.assertEqual(token["role"], "seller")

    def test_login_bad_password(self):
        response = self.client.post(self.url, {"email": "shop@example.com", "password": "nope"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {"success": False, "message": "Invalid credentials"})

    def test_issued_token_opens_seller_routes(self):
        ProductFactory(owner=self.seller)
        login = self.client.post(self.url, {"email": "shop@example.com", "password": "pw"}, format="json")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")
        response = self.client.get(reverse("marketplace:product-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["products"]), 1)

    def test_invalid_token_is_rejected_before_the_handler(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = self.client.get(reverse("marketplace:product-list"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    def test_refresh(self):
        login = self.client.post(self.url, {"email": "shop@example.com", "password": "pw"}, format="json")

        response = self.client.post(
            reverse("token_refresh"), {"refresh": login.data["refreshToken"]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
