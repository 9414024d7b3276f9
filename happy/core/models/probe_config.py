from pydantic import BaseModel, ConfigDict, StrictBool, conint


class ProbeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    queries: conint(strict=True, gt=0) = 3
    timeout: conint(strict=True, ge=0) = 2000
    delay: conint(strict=True, ge=0) = 25
    sort: StrictBool = False
    machine: StrictBool = False

    @property
    def timeout_us(self) -> int:
        return self.timeout * 1000

    @property
    def timeout_seconds(self) -> float | None:
        if self.timeout == 0:
            return None

        return self.timeout / 1000

    @property
    def delay_us(self) -> int:
        return self.delay * 1000
