import logging
import os

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

MSG91_OTP_URL = "https://api.msg91.com/api/v5/otp"


class MSG91Service:
    @staticmethod
    def normalize_phone(phone):
        """Prefix bare 10-digit numbers with the default country code."""
        phone = (phone or '').strip().lstrip('+')
        if len(phone) == 10:
            phone = settings.SMS_DEFAULT_COUNTRY_CODE + phone
        return phone

    @staticmethod
    def send_otp(phone, otp):
        """
        Send OTP using MSG91 API.
        Returns True when the provider accepted the message.
        """
        msg91_api_key = os.getenv("MSG91_API_KEY")
        msg91_template_id = os.getenv("MSG91_TEMPLATE_ID")

        if not all([msg91_api_key, msg91_template_id]):
            logger.warning("MSG91 credentials missing, OTP for %s not sent", phone)
            return False

        params = {
            "authkey": msg91_api_key,
            "template_id": msg91_template_id,
            "mobile": MSG91Service.normalize_phone(phone),
            "otp": otp,
            "otp_length": len(otp),
        }

        try:
            response = requests.get(MSG91_OTP_URL, params=params, timeout=10)
            if response.status_code == 200:
                return True
            logger.error("MSG91 error for %s: %s", phone, response.text)
            return False
        except requests.RequestException as e:
            logger.error("Error sending OTP via MSG91 to %s: %s", phone, e)
            return False
