import unittest

from gdrivefs.auth import AuthInfo


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid_oauth(self) -> None:
        info = AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": "/tmp/client_secrets.json",
                "token_file": "/tmp/token.json",
            },
        )
        self.assertEqual(info.kind, "oauth")
        self.assertEqual(info.token_file, "/tmp/token.json")

    def test_auth_info_valid_service_account(self) -> None:
        info = AuthInfo(kind="service_account", data={"service_account_file": "/tmp/sa.json"})
        self.assertEqual(info.service_account_file, "/tmp/sa.json")

    def test_auth_info_valid_authorized_user(self) -> None:
        info = AuthInfo(
            kind="authorized_user",
            data={"client_id": "id", "client_secret": "secret", "refresh_token": "rt"},
        )
        self.assertEqual(info.data["refresh_token"], "rt")

    def test_auth_info_invalid_kind(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="api_key", data={})

    def test_auth_info_missing_keys(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="oauth", data={"client_secrets_file": "x"})
        with self.assertRaises(ValueError):
            AuthInfo(kind="authorized_user", data={"client_id": "id", "client_secret": " "})


if __name__ == "__main__":
    unittest.main()
