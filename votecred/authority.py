"""
Credential Authority: credential issuance logic

Orchestrates the issuance flow for one election:
  1. Generate the election uuid (once)
  2. Verify voter eligibility
  3. Prevent duplicate issuance
  4. Generate the voter's credential and record only its public key

Passwords are handed back to the caller for out-of-band delivery and are
never kept here. The published list of public keys carries no voter ids.
"""

import logging
import threading

from votecred.base58 import b58encode
from votecred.config import LOG_LEVEL
from votecred.credentials import UUID, Credential

logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)


class CredentialAuthority:
    def __init__(self, rng, uuid: UUID = None):
        self._rng = rng
        self.uuid = uuid
        self._eligible = set()
        self._issued = {}  # voter_id -> public key
        self._lock = threading.Lock()

    def bootstrap(self, voter_ids: list = None) -> UUID:
        """
        Generate the election uuid if it does not exist yet, and optionally
        register a list of eligible voter ids.
        """
        if self.uuid is None:
            self.uuid = UUID.generate(self._rng)
            logger.info("[authority] Generated election uuid %s", self.uuid)
        else:
            logger.info("[authority] Election uuid already exists.")

        if voter_ids:
            with self._lock:
                self._eligible.update(voter_ids)
            logger.info("[authority] Registered %d eligible voters.", len(voter_ids))

        return self.uuid

    def is_eligible(self, voter_id: str) -> bool:
        with self._lock:
            return voter_id in self._eligible

    def issue_credential(self, voter_id: str) -> dict:
        """
        Issue a credential to an eligible voter who has none yet.

        Returns
        -------
        dict with keys:
            success    : bool
            credential : Credential (only on success), to deliver to the voter
            public_key : str (only on success), hex encoding
            public_key_b58 : str (only on success), base58 encoding
            error      : str (only on failure)
        """
        if self.uuid is None:
            return {"success": False, "error": "Authority not initialized"}

        with self._lock:
            # --- Eligibility check ---
            if voter_id not in self._eligible:
                return {"success": False, "error": "Voter ID not found in eligible voters list"}

            # --- Duplicate issuance check ---
            if voter_id in self._issued:
                return {"success": False, "error": "Credential already issued to this voter"}

            # Reserve the slot; the key is filled in once derived.
            self._issued[voter_id] = None

        try:
            credential = Credential.generate(self._rng, self.uuid)
        except Exception:
            with self._lock:
                del self._issued[voter_id]
            raise
        expanded = credential.expand()
        public_key = expanded.public_key.hex()
        public_key_b58 = b58encode(expanded.public_key)
        expanded.wipe()

        with self._lock:
            self._issued[voter_id] = public_key
        logger.debug("[authority] Issued credential with public key %s", public_key)

        return {
            "success": True,
            "credential": credential,
            "public_key": public_key,
            "public_key_b58": public_key_b58,
        }

    def voter_status(self, voter_id: str) -> dict:
        """Return issuance status for a voter."""
        with self._lock:
            public_key = self._issued.get(voter_id)
            return {
                "voter_id": voter_id,
                "eligible": voter_id in self._eligible,
                "issued": voter_id in self._issued,
                "public_key": public_key,
            }

    def public_keys(self) -> list:
        """Sorted public keys of all issued credentials, without voter ids."""
        with self._lock:
            return sorted(pk for pk in self._issued.values() if pk is not None)
