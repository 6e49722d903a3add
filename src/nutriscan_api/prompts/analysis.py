"""Nutrition label analysis prompt templates.

Both variants emit the same section headers in the same order. Product
name extraction and history previews read the model output by these
headers, so they must not be reordered or renamed independently.
"""

PRODUCT_NAME_HEADER = "📦 NAMA PRODUK"
NUTRITION_TABLE_HEADER = "📊 INFORMASI NILAI GIZI"
CONTENT_ANALYSIS_HEADER = "📈 ANALISIS"
WARNINGS_HEADER = "⚠️ PERINGATAN"
RECOMMENDATIONS_HEADER = "📅 REKOMENDASI"
TIPS_HEADER = "💡 TIPS"
CONCLUSION_HEADER = "✅ KESIMPULAN"

ANALYSIS_SECTIONS = (
    PRODUCT_NAME_HEADER,
    NUTRITION_TABLE_HEADER,
    CONTENT_ANALYSIS_HEADER,
    WARNINGS_HEADER,
    RECOMMENDATIONS_HEADER,
    TIPS_HEADER,
    CONCLUSION_HEADER,
)

PROFILE_NUDGE = "💡 Lengkapi profil kesehatan Anda untuk mendapatkan analisis yang dipersonalisasi!"

_NUTRITION_TABLE = """📊 INFORMASI NILAI GIZI

Takaran saji: [baca dari gambar]
Jumlah sajian: [baca dari gambar]

| Nutrisi | Jumlah | % AKG |
|---------|--------|-------|
| Energi | [X] kkal | [X]% |
| Lemak Total | [X] g | [X]% |
| Lemak Jenuh | [X] g | [X]% |
| Protein | [X] g | [X]% |
| Karbohidrat | [X] g | [X]% |
| Gula | [X] g | [X]% |
| Natrium | [X] mg | [X]% |
| Serat | [X] g | [X]% |
[tambahkan nutrisi lain jika ada di label]"""


PERSONALIZED_ANALYSIS_PROMPT = """Kamu adalah ahli gizi profesional. Baca label nutrisi pada gambar dengan AKURAT dan LENGKAP.

══════════════════════════════════════════
🏥 KONDISI KESEHATAN PENGGUNA:
{health_profile}
══════════════════════════════════════════

ATURAN WAJIB:
1. Baca SEMUA angka nutrisi dengan AKURAT dari gambar
2. Seluruh analisis HARUS berdasarkan kondisi di atas
3. DILARANG menyebut kondisi/penyakit yang TIDAK ada di profil
4. JANGAN mengarang kondisi lain (ibu hamil, menyusui, lansia, anak-anak, atau penyakit lain) yang tidak ada di profil
5. WAJIB memberikan output LENGKAP sesuai format dan urutan bagian di bawah

FORMAT OUTPUT (WAJIB LENGKAP):

📦 NAMA PRODUK
[Baca nama produk dari gambar, atau "Tidak teridentifikasi"]

""" + _NUTRITION_TABLE + """

📈 ANALISIS UNTUK KONDISI ANDA

🔸 [Nutrisi relevan] ([nilai]):
   → Dampak untuk kondisi Anda: [penjelasan]
   → Status: [aman/hati-hati/hindari]

[Analisis HANYA nutrisi yang relevan dengan kondisi di profil]

⚠️ PERINGATAN UNTUK KONDISI ANDA

🔴 Yang perlu Anda waspadai:
• [Peringatan HANYA untuk kondisi yang ada di profil]

🟢 Hal positif untuk kondisi Anda:
• [Kandungan yang baik untuk kondisi di profil]

📅 REKOMENDASI UNTUK ANDA

🕐 Frekuensi: [spesifik untuk kondisi Anda]
📏 Porsi: [spesifik untuk kondisi Anda]
⏰ Waktu: [spesifik untuk kondisi Anda]

💡 TIPS UNTUK KONDISI ANDA

1. [Tips spesifik untuk kondisi di profil]
2. [Tips spesifik untuk kondisi di profil]
3. [Tips spesifik untuk kondisi di profil]

✅ KESIMPULAN

📊 Rating untuk kondisi Anda: [⭐ sampai ⭐⭐⭐⭐⭐] dari 5
📝 [Kesimpulan spesifik untuk kondisi Anda dalam 2-3 kalimat]"""


GENERIC_ANALYSIS_PROMPT = """Kamu adalah ahli gizi profesional. Baca label nutrisi pada gambar dengan AKURAT dan LENGKAP.

Berikan panduan untuk masyarakat umum. WAJIB memberikan output LENGKAP sesuai format dan urutan bagian berikut:

📦 NAMA PRODUK
[Baca nama produk dari gambar, atau "Tidak teridentifikasi"]

""" + _NUTRITION_TABLE + """

📈 ANALISIS KANDUNGAN

🔸 Energi: [analisis kalori, apakah tinggi/sedang/rendah]
🔸 Lemak: [analisis lemak total dan jenuh]
🔸 Gula: [bandingkan dengan batas 25g/hari WHO]
🔸 Natrium: [bandingkan dengan batas 2000mg/hari]
🔸 Protein: [apakah cukup sebagai sumber protein]
🔸 Serat: [apakah mengandung serat yang baik]

⚠️ PERINGATAN UMUM

🔴 Perlu diwaspadai:
• [Kandungan yang tinggi dan perlu perhatian]

🟢 Hal positif:
• [Kandungan yang baik untuk kesehatan]

📅 REKOMENDASI KONSUMSI

🕐 Frekuensi: [berapa kali per minggu yang aman]
📏 Porsi: [jumlah porsi yang disarankan]
⏰ Waktu terbaik: [kapan sebaiknya dikonsumsi]

💡 TIPS SEHAT

1. [Tips pertama untuk konsumsi produk ini]
2. [Tips kedua]
3. [Tips ketiga]

✅ KESIMPULAN

📊 Rating kesehatan: [⭐ sampai ⭐⭐⭐⭐⭐] dari 5
📝 [Kesimpulan keseluruhan dalam 2-3 kalimat]

""" + PROFILE_NUDGE
