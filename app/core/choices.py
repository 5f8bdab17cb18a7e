# app/core/choices.py
# Vocabularios fijos del formulario (se envían tal cual en /meta)

SCALE_ORDER = ("A", "B", "C", "D", "E", "F")  # F = escala de mentira (validez)

NO_ANSWER = "未回答"

GENDER_CHOICES = (NO_ANSWER, "男性", "女性", "その他", "回答しない")
AGE_BAND_CHOICES = (NO_ANSWER, "〜20代", "30代", "40代", "50代", "60代〜")

LIKERT_MIN = 1
LIKERT_MAX = 6

LIKERT_CHOICES = (
    (1, "全くあてはまらない（1）"),
    (2, "あてはまらない（2）"),
    (3, "ややあてはまらない（3）"),
    (4, "ややあてはまる（4）"),
    (5, "あてはまる（5）"),
    (6, "非常にあてはまる（6）"),
)
