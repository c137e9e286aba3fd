from dataclasses import dataclass

from bahith.models import ResearchMode


@dataclass(frozen=True)
class DocumentLabels:
	date_prefix: str = 'تاريخ البحث'
	bibliography_title: str = 'قائمة المصادر المعتمدة'
	bibliography_intro: str = 'تم الرجوع إلى المصادر التالية أثناء إعداد هذا البحث (عبر النسخ الرقمية المتاحة):'
	bibliography_empty: str = 'تم الاعتماد على القاعدة المعرفية للكتب التراثية (دون روابط خارجية مباشرة).'
	scientific_subtitle: str = 'بحث علمي موسع موثق من أمهات الكتب'
	intellectual_subtitle: str = 'بحث فكري تحليلي موثق'

	def subtitle(self, mode: ResearchMode) -> str:
		if mode == ResearchMode.INTELLECTUAL:
			return self.intellectual_subtitle
		return self.scientific_subtitle


ENGLISH_LABELS = DocumentLabels(
	date_prefix='Date',
	bibliography_title='Sources',
	bibliography_intro='The following sources were consulted while preparing this research:',
	bibliography_empty='No linked sources were returned; the text relies on the model\'s own knowledge.',
	scientific_subtitle='An extended, documented scholarly study',
	intellectual_subtitle='An analytical study of ideas',
)


def labels_for_language(language: str) -> DocumentLabels:
	if language.strip().lower() == 'english':
		return ENGLISH_LABELS
	return DocumentLabels()
