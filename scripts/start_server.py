"""Run the FastAPI application over a synthetic session."""

from __future__ import annotations

import hydra
import uvicorn
from omegaconf import DictConfig, OmegaConf

from benched.core.registry import SessionRegistry
from benched.runtime.synthetic import SyntheticConfig, populate_registry
from benched.serve.api import create_app
from benched.utils.logging import logger, setup_logging


@hydra.main(config_path="../configs", config_name="server", version_base=None)
def main(cfg: DictConfig) -> None:
    setup_logging(level=cfg.get("log_level", "INFO"))

    registry = SessionRegistry()
    synthetic = SyntheticConfig(**OmegaConf.to_container(cfg.synthetic, resolve=True))
    session = populate_registry(registry, synthetic, context_id=cfg.context_id)
    logger.info("serving {name} with {n} frames", name=session.name, n=len(session.frames))

    uvicorn.run(create_app(registry), host=cfg.host, port=int(cfg.port), reload=False)


if __name__ == "__main__":
    main()
