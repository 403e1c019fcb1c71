from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PdfOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    format: str = Field("A4", validation_alias=AliasChoices("format", "paperFormat"))
    print_background: bool = Field(True, alias="printBackground")
    landscape: bool = False
    margin_top: str = Field("10mm", alias="marginTop")
    margin_right: str = Field("10mm", alias="marginRight")
    margin_bottom: str = Field("10mm", alias="marginBottom")
    margin_left: str = Field("10mm", alias="marginLeft")

    def margins(self) -> Dict[str, str]:
        return {
            "top": self.margin_top,
            "right": self.margin_right,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
        }


class ScreenshotRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # url and savePath accept null and default to "" so the validator produces the rejection message
    url: Optional[str] = ""
    save_path: Optional[str] = Field("", alias="savePath")
    format: Optional[str] = "png"  # jpg, jpeg, png or pdf
    quality: Optional[int] = 80  # JPEG only (0-100)
    pdf_options: Optional[PdfOptions] = Field(None, alias="pdfOptions")


class ScreenshotResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str = ""
    file_path: Optional[str] = Field(None, alias="filePath")
    format: Optional[str] = None
    file_size: Optional[int] = Field(None, alias="fileSize")
    dimensions: Optional[Dict[str, int]] = None

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# Capture kinds, built once per request by utils.resolve_capture_kind

@dataclass(frozen=True)
class JpegCapture:
    quality: int = 80
    extension = ".jpg"
    label = "JPEG"
    image_type = "jpeg"


@dataclass(frozen=True)
class PngCapture:
    extension = ".png"
    label = "PNG"
    image_type = "png"


@dataclass(frozen=True)
class PdfCapture:
    options: PdfOptions = field(default_factory=PdfOptions)
    extension = ".pdf"
    label = "PDF"


CaptureKind = Union[JpegCapture, PngCapture, PdfCapture]


@dataclass
class CaptureOutcome:
    file_path: str
    label: str
    file_size: int
    dimensions: Optional[Dict[str, int]] = None
