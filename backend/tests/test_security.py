import unittest

from vetcare.core.security import TokenStore, hash_password, verify_password


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TokenStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.store = TokenStore(ttl_seconds=60, clock=self.clock)

    def test_token_resolves_until_expiry(self) -> None:
        token = self.store.issue("user-1")
        self.clock.now += 59
        self.assertEqual(self.store.resolve(token), "user-1")

        self.clock.now += 1
        self.assertIsNone(self.store.resolve(token))
        self.assertEqual(len(self.store), 0)

    def test_issue_sweeps_expired_tokens(self) -> None:
        for n in range(5):
            self.store.issue(f"user-{n}")
        self.assertEqual(len(self.store), 5)

        self.clock.now += 120
        fresh = self.store.issue("user-9")
        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.store.resolve(fresh), "user-9")

    def test_revoke_user_drops_all_of_their_tokens(self) -> None:
        first = self.store.issue("user-1")
        second = self.store.issue("user-1")
        other = self.store.issue("user-2")

        self.store.revoke_user("user-1")

        self.assertIsNone(self.store.resolve(first))
        self.assertIsNone(self.store.resolve(second))
        self.assertEqual(self.store.resolve(other), "user-2")

    def test_unknown_token(self) -> None:
        self.assertIsNone(self.store.resolve("missing"))


class PasswordHashTestCase(unittest.TestCase):
    def test_hash_round_trip(self) -> None:
        stored = hash_password("s3cret-pass")
        self.assertTrue(stored.startswith("pbkdf2_sha256$"))
        self.assertTrue(verify_password("s3cret-pass", stored))
        self.assertFalse(verify_password("wrong", stored))

    def test_malformed_hash_is_rejected(self) -> None:
        self.assertFalse(verify_password("x", ""))
        self.assertFalse(verify_password("x", "pbkdf2_sha256$abc$zz$zz"))
