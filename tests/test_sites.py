import os
from unittest import TestCase
from unittest.mock import patch

from leadgen.backend import sites


class SiteResolutionTests(TestCase):
	def test_default_site_is_halo(self) -> None:
		with patch.dict(os.environ, {}, clear=False):
			os.environ.pop("LEADGEN_SITE", None)
			self.assertIs(sites.resolve_site(), sites.HALO)

	def test_site_from_environment(self) -> None:
		with patch.dict(os.environ, {"LEADGEN_SITE": " VisaPlace "}, clear=False):
			self.assertIs(sites.resolve_site(), sites.VISAPLACE)

	def test_unknown_site_rejected(self) -> None:
		with self.assertRaises(ValueError):
			sites.resolve_site("acme")

	def test_only_halo_offers_interaction_modes(self) -> None:
		self.assertTrue(sites.HALO.offers_interaction_modes)
		self.assertFalse(sites.VISAPLACE.offers_interaction_modes)
