import json
import os
import tempfile
from pathlib import Path

from cardmax.domain.models import Card, RewardRule, Transaction
from cardmax.log import get_logger
from cardmax.repository.memory import InMemoryWalletRepository

logger = get_logger(__name__)


class JsonWalletRepository(InMemoryWalletRepository):
    """Wallet store persisted as one JSON document, rewritten after each change.

    Layout: {"cards": [...], "rules": [...], "transactions": [...], "last_ids": {...}}.
    """

    def __init__(self, data_file: str):
        self.data_file = Path(data_file)
        data = self._load()
        super().__init__(
            cards=[Card.model_validate(item) for item in data.get("cards", [])],
            rules=[RewardRule.model_validate(item) for item in data.get("rules", [])],
            transactions=[Transaction.model_validate(item) for item in data.get("transactions", [])],
            last_ids={str(k): int(v) for k, v in data.get("last_ids", {}).items()},
        )
        logger.info(
            "wallet_loaded",
            path=str(self.data_file),
            cards=len(self._cards),
            rules=len(self._rules),
            transactions=len(self._transactions),
        )

    def _load(self) -> dict:
        if not self.data_file.exists():
            logger.info("wallet_file_missing", path=str(self.data_file))
            return {}

        with self.data_file.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def _persist(self) -> None:
        payload = {
            "cards": [card.model_dump(mode="json") for card in self._cards.values()],
            "rules": [rule.model_dump(mode="json") for rule in self._rules.values()],
            "transactions": [txn.model_dump(mode="json") for txn in self._transactions.values()],
            "last_ids": dict(self._last_ids),
        }

        self.data_file.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=".json",
            prefix=f".{self.data_file.stem}_",
            dir=self.data_file.parent,
            delete=False,
            encoding="utf-8",
        ) as fp:
            tmp_path = Path(fp.name)
            try:
                json.dump(payload, fp, ensure_ascii=False, indent=2)
            except BaseException:
                fp.close()
                tmp_path.unlink(missing_ok=True)
                raise

        try:
            os.replace(tmp_path, self.data_file)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            logger.error("wallet_write_failed", path=str(self.data_file))
            raise
