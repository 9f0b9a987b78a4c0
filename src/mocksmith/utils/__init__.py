from mocksmith.utils.quality import SeedReport

__all__ = ["SeedReport"]
