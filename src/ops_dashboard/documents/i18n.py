"""Label tables for the PDF documents and API error messages.

Three languages: ``en``, ``he`` and ``ae`` (Arabic). Every table is keyed
identically across languages; missing keys fall back to English.
"""

from __future__ import annotations

from typing import Dict, List, Optional

DEFAULT_LANGUAGE = "en"
LANGUAGES = ("en", "he", "ae")
RTL_LANGUAGES = {"he", "ae"}

# value for the html ``lang`` attribute
HTML_LANG = {"en": "en", "he": "he", "ae": "ar"}

_ALIASES = {"ar": "ae", "iw": "he", "english": "en", "hebrew": "he", "arabic": "ae"}


def _primary(tag: str) -> str:
    primary = tag.strip().lower().replace("_", "-").split("-")[0]
    return _ALIASES.get(primary, primary)


def is_supported(tag: Optional[str]) -> bool:
    return bool(tag) and _primary(tag) in LANGUAGES


def normalize_language(tag: Optional[str], default: str = DEFAULT_LANGUAGE) -> str:
    """Map a language tag (``he-IL``, ``ar``, ``EN``...) onto a supported language."""
    if is_supported(tag):
        return _primary(tag)
    return default if default in LANGUAGES else DEFAULT_LANGUAGE


def text_direction(language: str) -> str:
    return "rtl" if language in RTL_LANGUAGES else "ltr"


MONTH_NAMES: Dict[str, List[str]] = {
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    "he": [
        "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
        "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
    ],
    "ae": [
        "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
        "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
    ],
}

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "booking_summary": "Booking Summary",
        "reference": "Reference #",
        "booking_information": "Booking Information",
        "type": "Type",
        "trip_date": "Trip Date",
        "status": "Status",
        "payment_status": "Payment Status",
        "customer_information": "Customer Information",
        "name": "Name",
        "email": "Email",
        "phone": "Phone",
        "school": "School",
        "destination": "Destination",
        "address": "Address",
        "trip_details": "Trip Details",
        "students": "Students",
        "crew": "Crew",
        "buses": "Buses",
        "booked_services": "Booked Services",
        "service": "Service",
        "qty": "Qty",
        "days": "Days",
        "price": "Price",
        "financial_summary": "Financial Summary",
        "total_amount": "Total Amount",
        "payment_method": "Payment Method",
        "payments": "Payments",
        "amount": "Amount",
        "date": "Date",
        "paid_amount": "Paid",
        "balance_due": "Balance Due",
        "additional_information": "Additional Information",
        "notes": "Notes",
        "special_requests": "Special Requests",
        "generated_on": "Generated on",
        "not_available": "N/A",
        "car_purchase_agreement": "Car Purchase Agreement",
        "contract_date": "Contract Date",
        "seller": "Seller",
        "buyer": "Buyer",
        "id_number": "ID Number",
        "company": "Company",
        "tax_number": "Tax Number",
        "vehicle_information": "Vehicle Information",
        "make": "Make",
        "model": "Model",
        "year": "Year",
        "plate_number": "Plate Number",
        "kilometers": "Kilometers",
        "vin": "VIN",
        "engine_number": "Engine Number",
        "trade_in_vehicle": "Trade-in Vehicle",
        "estimated_value": "Estimated Value",
        "purchase_details": "Purchase Details",
        "purchase_amount": "Purchase Amount",
        "remaining_amount": "Remaining Amount",
        "remaining_payment_date": "Remaining Payment Date",
        "terms_and_conditions": "Terms and Conditions",
        "sellers_signature": "Seller's Signature",
        "buyers_signature": "Buyer's Signature",
        "signature_date": "Date: ______________",
        "activity_logs": "Activity Logs",
        "total_records": "Total records",
        "log_date": "Log Date",
        "activity": "Activity",
        "car_details": "Car",
        "purchase_info": "Purchase Date / Provider / Price",
        "sale_info": "Sale Date / Buyer / Price",
        "commission": "Commission",
        "deal_status": "Deal Status",
        "deal_type": "Deal Type",
        "no_car_number": "No plate",
        "no_records": "No activity recorded for this period",
    },
    "he": {
        "booking_summary": "סיכום הזמנה",
        "reference": "מספר הזמנה",
        "booking_information": "פרטי ההזמנה",
        "type": "סוג",
        "trip_date": "תאריך הטיול",
        "status": "סטטוס",
        "payment_status": "סטטוס תשלום",
        "customer_information": "פרטי הלקוח",
        "name": "שם",
        "email": "דוא\"ל",
        "phone": "טלפון",
        "school": "בית ספר",
        "destination": "יעד",
        "address": "כתובת",
        "trip_details": "פרטי הטיול",
        "students": "תלמידים",
        "crew": "צוות",
        "buses": "אוטובוסים",
        "booked_services": "שירותים שהוזמנו",
        "service": "שירות",
        "qty": "כמות",
        "days": "ימים",
        "price": "מחיר",
        "financial_summary": "סיכום כספי",
        "total_amount": "סכום כולל",
        "payment_method": "אמצעי תשלום",
        "payments": "תשלומים",
        "amount": "סכום",
        "date": "תאריך",
        "paid_amount": "שולם",
        "balance_due": "יתרה לתשלום",
        "additional_information": "מידע נוסף",
        "notes": "הערות",
        "special_requests": "בקשות מיוחדות",
        "generated_on": "הופק בתאריך",
        "not_available": "לא זמין",
        "car_purchase_agreement": "הסכם רכישת רכב",
        "contract_date": "תאריך החוזה",
        "seller": "המוכר",
        "buyer": "הקונה",
        "id_number": "מספר זהות",
        "company": "חברה",
        "tax_number": "מספר עוסק",
        "vehicle_information": "פרטי הרכב",
        "make": "יצרן",
        "model": "דגם",
        "year": "שנה",
        "plate_number": "מספר רישוי",
        "kilometers": "קילומטרים",
        "vin": "מספר שלדה",
        "engine_number": "מספר מנוע",
        "trade_in_vehicle": "רכב בטרייד-אין",
        "estimated_value": "שווי מוערך",
        "purchase_details": "פרטי הרכישה",
        "purchase_amount": "סכום הרכישה",
        "remaining_amount": "יתרה",
        "remaining_payment_date": "מועד תשלום היתרה",
        "terms_and_conditions": "תנאים והגבלות",
        "sellers_signature": "חתימת המוכר",
        "buyers_signature": "חתימת הקונה",
        "signature_date": "תאריך: ______________",
        "activity_logs": "יומן פעילות",
        "total_records": "סך רשומות",
        "log_date": "תאריך רישום",
        "activity": "פעולה",
        "car_details": "רכב",
        "purchase_info": "תאריך רכישה / ספק / מחיר",
        "sale_info": "תאריך מכירה / קונה / מחיר",
        "commission": "עמלה",
        "deal_status": "סטטוס עסקה",
        "deal_type": "סוג עסקה",
        "no_car_number": "ללא מספר רישוי",
        "no_records": "לא נרשמה פעילות בתקופה זו",
    },
    "ae": {
        "booking_summary": "ملخص الحجز",
        "reference": "رقم الحجز",
        "booking_information": "معلومات الحجز",
        "type": "النوع",
        "trip_date": "تاريخ الرحلة",
        "status": "الحالة",
        "payment_status": "حالة الدفع",
        "customer_information": "معلومات العميل",
        "name": "الاسم",
        "email": "البريد الإلكتروني",
        "phone": "الهاتف",
        "school": "المدرسة",
        "destination": "الوجهة",
        "address": "العنوان",
        "trip_details": "تفاصيل الرحلة",
        "students": "الطلاب",
        "crew": "الطاقم",
        "buses": "الحافلات",
        "booked_services": "الخدمات المحجوزة",
        "service": "الخدمة",
        "qty": "الكمية",
        "days": "الأيام",
        "price": "السعر",
        "financial_summary": "الملخص المالي",
        "total_amount": "المبلغ الإجمالي",
        "payment_method": "طريقة الدفع",
        "payments": "الدفعات",
        "amount": "المبلغ",
        "date": "التاريخ",
        "paid_amount": "المدفوع",
        "balance_due": "الرصيد المستحق",
        "additional_information": "معلومات إضافية",
        "notes": "ملاحظات",
        "special_requests": "طلبات خاصة",
        "generated_on": "تم الإنشاء في",
        "not_available": "غير متوفر",
        "car_purchase_agreement": "عقد شراء سيارة",
        "contract_date": "تاريخ العقد",
        "seller": "البائع",
        "buyer": "المشتري",
        "id_number": "رقم الهوية",
        "company": "الشركة",
        "tax_number": "الرقم الضريبي",
        "vehicle_information": "معلومات السيارة",
        "make": "الماركة",
        "model": "الموديل",
        "year": "السنة",
        "plate_number": "رقم اللوحة",
        "kilometers": "الكيلومترات",
        "vin": "رقم الشاسيه",
        "engine_number": "رقم المحرك",
        "trade_in_vehicle": "سيارة الاستبدال",
        "estimated_value": "القيمة التقديرية",
        "purchase_details": "تفاصيل الشراء",
        "purchase_amount": "مبلغ الشراء",
        "remaining_amount": "المبلغ المتبقي",
        "remaining_payment_date": "تاريخ دفع المتبقي",
        "terms_and_conditions": "الشروط والأحكام",
        "sellers_signature": "توقيع البائع",
        "buyers_signature": "توقيع المشتري",
        "signature_date": "التاريخ: ______________",
        "activity_logs": "سجل النشاطات",
        "total_records": "إجمالي السجلات",
        "log_date": "تاريخ السجل",
        "activity": "النشاط",
        "car_details": "السيارة",
        "purchase_info": "تاريخ الشراء / المورد / السعر",
        "sale_info": "تاريخ البيع / المشتري / السعر",
        "commission": "العمولة",
        "deal_status": "حالة الصفقة",
        "deal_type": "نوع الصفقة",
        "no_car_number": "بدون رقم لوحة",
        "no_records": "لا توجد نشاطات مسجلة في هذه الفترة",
    },
}

BOOKING_TYPE_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "full_trip": "Full Trip",
        "guides_only": "Guides Only",
        "paramedics_only": "Paramedics Only",
        "security_only": "Security Only",
        "entertainment_only": "Entertainment Only",
        "education_only": "Education Only",
        "transportation_only": "Transportation Only",
    },
    "he": {
        "full_trip": "טיול מלא",
        "guides_only": "מדריכים בלבד",
        "paramedics_only": "חובשים בלבד",
        "security_only": "אבטחה בלבד",
        "entertainment_only": "בידור בלבד",
        "education_only": "תוכניות חינוכיות בלבד",
        "transportation_only": "הסעות בלבד",
    },
    "ae": {
        "full_trip": "رحلة كاملة",
        "guides_only": "مرشدين فقط",
        "paramedics_only": "مسعفين فقط",
        "security_only": "أمن فقط",
        "entertainment_only": "ترفيه فقط",
        "education_only": "برامج تعليمية فقط",
        "transportation_only": "نقل فقط",
    },
}

STATUS_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "pending": "Pending",
        "confirmed": "Confirmed",
        "completed": "Completed",
        "cancelled": "Cancelled",
        "active": "Active",
        "inactive": "Inactive",
    },
    "he": {
        "pending": "ממתין",
        "confirmed": "מאושר",
        "completed": "הושלם",
        "cancelled": "בוטל",
        "active": "פעיל",
        "inactive": "לא פעיל",
    },
    "ae": {
        "pending": "قيد الانتظار",
        "confirmed": "مؤكد",
        "completed": "مكتمل",
        "cancelled": "ملغي",
        "active": "نشط",
        "inactive": "غير نشط",
    },
}

PAYMENT_STATUS_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "pending": "Pending",
        "deposit_paid": "Deposit Paid",
        "fully_paid": "Fully Paid",
        "paid": "Paid",
        "cancelled": "Cancelled",
    },
    "he": {
        "pending": "ממתין",
        "deposit_paid": "מקדמה שולמה",
        "fully_paid": "שולם במלואו",
        "paid": "שולם",
        "cancelled": "בוטל",
    },
    "ae": {
        "pending": "قيد الانتظار",
        "deposit_paid": "تم دفع العربون",
        "fully_paid": "مدفوع بالكامل",
        "paid": "مدفوع",
        "cancelled": "ملغي",
    },
}

SERVICE_TYPE_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "guides": "Guides",
        "paramedics": "Paramedics",
        "security_companies": "Security Companies",
        "external_entertainment_companies": "Entertainment Companies",
        "travel_companies": "Travel Companies",
        "education_programs": "Education Programs",
    },
    "he": {
        "guides": "מדריכים",
        "paramedics": "חובשים",
        "security_companies": "חברות אבטחה",
        "external_entertainment_companies": "חברות בידור",
        "travel_companies": "חברות הסעה",
        "education_programs": "תוכניות חינוכיות",
    },
    "ae": {
        "guides": "المرشدين",
        "paramedics": "المسعفين",
        "security_companies": "شركات الأمن",
        "external_entertainment_companies": "شركات الترفيه",
        "travel_companies": "شركات السفر",
        "education_programs": "البرامج التعليمية",
    },
}

PAYMENT_METHOD_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "bank_transfer": "Bank Transfer",
        "cash": "Cash",
        "credit_card": "Credit Card",
        "check": "Check",
        "visa": "Visa",
        "other": "Other",
    },
    "he": {
        "bank_transfer": "העברה בנקאית",
        "cash": "מזומן",
        "credit_card": "כרטיס אשראי",
        "check": "צ'ק",
        "visa": "ויזה",
        "other": "אחר",
    },
    "ae": {
        "bank_transfer": "تحويل بنكي",
        "cash": "نقداً",
        "credit_card": "بطاقة ائتمان",
        "check": "شيك",
        "visa": "فيزا",
        "other": "أخرى",
    },
}

ACTIVITY_TYPE_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "car_added": "Car added",
        "car_updated": "Car updated",
        "car_deleted": "Car deleted",
        "car_received_from_client": "Car received from client",
        "deal_created": "Deal created",
        "deal_updated": "Deal updated",
        "deal_deleted": "Deal deleted",
        "customer_added": "Customer added",
        "customer_updated": "Customer updated",
        "provider_added": "Provider added",
        "provider_updated": "Provider updated",
        "shop_added": "Shop added",
    },
    "he": {
        "car_added": "רכב נוסף",
        "car_updated": "רכב עודכן",
        "car_deleted": "רכב נמחק",
        "car_received_from_client": "רכב התקבל מלקוח",
        "deal_created": "עסקה נוצרה",
        "deal_updated": "עסקה עודכנה",
        "deal_deleted": "עסקה נמחקה",
        "customer_added": "לקוח נוסף",
        "customer_updated": "לקוח עודכן",
        "provider_added": "ספק נוסף",
        "provider_updated": "ספק עודכן",
        "shop_added": "חנות נוספה",
    },
    "ae": {
        "car_added": "تمت إضافة سيارة",
        "car_updated": "تم تحديث سيارة",
        "car_deleted": "تم حذف سيارة",
        "car_received_from_client": "تم استلام سيارة من عميل",
        "deal_created": "تم إنشاء صفقة",
        "deal_updated": "تم تحديث صفقة",
        "deal_deleted": "تم حذف صفقة",
        "customer_added": "تمت إضافة عميل",
        "customer_updated": "تم تحديث عميل",
        "provider_added": "تمت إضافة مورد",
        "provider_updated": "تم تحديث مورد",
        "shop_added": "تمت إضافة متجر",
    },
}

CONTRACT_TERMS: Dict[str, List[str]] = {
    "en": [
        "The seller guarantees that the vehicle is free of any liens or encumbrances.",
        'The vehicle is sold "as is" with no warranties expressed or implied.',
        "The seller agrees to transfer ownership within {days} days.",
        "The buyer has inspected the vehicle and agrees to its current condition.",
        "This agreement is binding upon both parties once signed.",
        "The buyer (company) purchases this vehicle for business purposes.",
    ],
    "he": [
        "המוכר מתחייב כי הרכב נקי מכל שעבוד או עיקול.",
        'הרכב נמכר "כמות שהוא" ללא כל אחריות מפורשת או משתמעת.',
        "המוכר מתחייב להעביר את הבעלות תוך {days} ימים.",
        "הקונה בדק את הרכב ומסכים למצבו הנוכחי.",
        "הסכם זה מחייב את שני הצדדים עם חתימתו.",
        "הקונה (החברה) רוכש רכב זה לצורכי עסק.",
    ],
    "ae": [
        "يضمن البائع أن السيارة خالية من أي رهونات أو التزامات.",
        'السيارة تباع "كما هي" بدون أي ضمانات صريحة أو ضمنية.',
        "يوافق البائع على نقل الملكية خلال {days} يوماً.",
        "المشتري قد فحص السيارة ويوافق على حالتها الحالية.",
        "هذا الاتفاق ملزم لكلا الطرفين بمجرد التوقيع.",
        "المشتري (الشركة) يشتري هذه السيارة لأغراض تجارية.",
    ],
}

ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "error": "An unexpected error occurred",
        "validation_failed": "Some fields are invalid",
        "not_found": "The requested record was not found",
        "conflict": "The record already exists",
        "authentication_failed": "Invalid email or password",
        "data_fetch_failed": "Failed to load data, please try again",
        "render_failed": "Failed to generate PDF",
    },
    "he": {
        "error": "אירעה שגיאה בלתי צפויה",
        "validation_failed": "חלק מהשדות אינם תקינים",
        "not_found": "הרשומה המבוקשת לא נמצאה",
        "conflict": "הרשומה כבר קיימת",
        "authentication_failed": "אימייל או סיסמה שגויים",
        "data_fetch_failed": "טעינת הנתונים נכשלה, נסו שוב",
        "render_failed": "יצירת ה-PDF נכשלה",
    },
    "ae": {
        "error": "حدث خطأ غير متوقع",
        "validation_failed": "بعض الحقول غير صالحة",
        "not_found": "لم يتم العثور على السجل المطلوب",
        "conflict": "السجل موجود بالفعل",
        "authentication_failed": "البريد الإلكتروني أو كلمة المرور غير صحيحة",
        "data_fetch_failed": "فشل تحميل البيانات، يرجى المحاولة مرة أخرى",
        "render_failed": "فشل إنشاء ملف PDF",
    },
}


def translate(language: str, key: str) -> str:
    table = LABELS.get(language, LABELS[DEFAULT_LANGUAGE])
    return table.get(key) or LABELS[DEFAULT_LANGUAGE].get(key, key)


def lookup(tables: Dict[str, Dict[str, str]], language: str, value: Optional[str]) -> str:
    """Label for an enum-like ``value``; unknown values are returned as-is."""
    if not value:
        return ""
    table = tables.get(language, tables[DEFAULT_LANGUAGE])
    return table.get(value) or tables[DEFAULT_LANGUAGE].get(value, value)


def error_message(language: str, code: str) -> str:
    table = ERROR_MESSAGES.get(language, ERROR_MESSAGES[DEFAULT_LANGUAGE])
    return table.get(code) or table["error"]
