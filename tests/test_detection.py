from detat.detection import (
    BooleanConfidence,
    ChardetDetector,
    CharsetNormalizerDetector,
    DetectionResult,
    DetectorName,
    GradedConfidence,
    encoding_for_charset,
    get_detector,
)
from detat.transcode import Trap

UTF8_TEXT = "héllo wörld, ça va? Ünïcödé déjà vu. " * 8


def test_chardet_detects_ascii_with_full_confidence():
    result = ChardetDetector().detect(b"plain ascii text, nothing special here\n")
    assert encoding_for_charset(result.label) == "ascii"
    assert result.confidence == GradedConfidence(1.0)
    assert result.language is not None


def test_chardet_detects_utf8():
    result = ChardetDetector().detect(UTF8_TEXT.encode("utf-8"))
    assert encoding_for_charset(result.label) == "utf-8"
    assert result.confidence.value > 0.9


def test_charset_normalizer_reports_boolean_confidence():
    result = CharsetNormalizerDetector().detect(UTF8_TEXT.encode("utf-8"))
    assert encoding_for_charset(result.label) == "utf-8"
    assert result.confidence == BooleanConfidence(True)
    assert result.language is None


def test_blank_results_are_binary_with_zero_confidence():
    assert ChardetDetector().blank().is_binary
    assert ChardetDetector().blank().confidence.value == 0.0
    assert CharsetNormalizerDetector().blank().confidence.value is False


def test_graded_confidence_threshold():
    assert GradedConfidence(0.5).clears(0.5)
    assert not GradedConfidence(0.49).clears(0.5)
    assert GradedConfidence(0.0).clears(None)


def test_boolean_confidence_has_no_threshold():
    assert BooleanConfidence(True).clears(0.99)
    assert not BooleanConfidence(False).clears(0.0)
    assert str(BooleanConfidence(True)) == "true"


def test_encoding_for_charset_keeps_unknown_labels():
    assert encoding_for_charset("SHIFT_JIS") == "shift_jis"
    assert encoding_for_charset("Windows-1252") == "cp1252"
    assert encoding_for_charset("EUC-TW") == "EUC-TW"


def test_detection_result_serializes_like_chardet():
    result = DetectionResult(label="utf-8", confidence=GradedConfidence(0.99), language="")
    assert result.to_dict() == {"charset": "utf-8", "confidence": 0.99, "language": ""}


def test_get_detector_by_name():
    assert isinstance(get_detector("chardet"), ChardetDetector)
    assert isinstance(get_detector(DetectorName.CHARSET_NORMALIZER), CharsetNormalizerDetector)
    assert get_detector("charset-normalizer").fixed_trap is Trap.REPLACE
