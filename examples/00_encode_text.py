from pathlib import Path

from qrcodec.containers.grid_text import format_grid_text, format_pgm
from qrcodec.pipeline.config import EncodeConfig
from qrcodec.pipeline.pipeline import encode_symbol
from qrcodec.render.text import render_dense


if __name__ == "__main__":
    cfg = EncodeConfig(
        level="M",
        version=None,   # smallest version that fits
        micro=False,
        encoding=None,  # UTF-8, no ECI header
    )
    symbol = encode_symbol("https://example.com/qrcodec", cfg=cfg)
    print(render_dense(symbol.grid, invert=True))
    print(f"version {symbol.version}-{symbol.level.value}, mask {symbol.mask}")

    out = Path("tests/output/reference")
    out.mkdir(parents=True, exist_ok=True)
    (out / "example_grid.txt").write_text(format_grid_text(symbol.grid, quiet_zone=4) + "\n")
    (out / "example_grid.pgm").write_text(format_pgm(symbol.grid, quiet_zone=4))
    print(f"Wrote {out / 'example_grid.txt'} and {out / 'example_grid.pgm'}")
