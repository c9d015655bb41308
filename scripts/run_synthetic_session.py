"""Drive a synthetic benchmark session and export its report."""

from __future__ import annotations

from pathlib import Path

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from benched.report.export import ExportConfig, ReportExporter, dump_results
from benched.report.generator import ReportConfig
from benched.runtime.synthetic import SyntheticConfig, SyntheticDriver
from benched.utils.logging import logger, setup_logging


@hydra.main(config_path="../configs", config_name="synthetic", version_base=None)
def main(cfg: DictConfig) -> None:
    setup_logging(level=cfg.get("log_level", "INFO"))

    synthetic = SyntheticConfig(**OmegaConf.to_container(cfg.synthetic, resolve=True))
    session = SyntheticDriver(synthetic).run()
    dump_results(session)

    # Hydra changes CWD to outputs/..., resolve against the launch directory
    out_dir = Path(to_absolute_path(cfg.export.output_dir))
    exporter = ReportExporter(
        report_config=ReportConfig(**cfg.report),
        config=ExportConfig(output_dir=out_dir, write_manifest=bool(cfg.export.write_manifest)),
    )
    result = exporter.export(session)
    if not result.ok:
        logger.warning("some tables failed to export: {failed}", failed=[str(p) for p in result.failed])


if __name__ == "__main__":
    main()
